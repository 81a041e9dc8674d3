"""
Application boundary of the lesson planner.

LessonPlannerService is the single place where failures are turned
into user-visible messages: every method returns a Result, and the
plan passed in is never modified, so a failed operation leaves the
caller's in-edit plan exactly as it was.
"""

import logging
import threading
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from . import messages
from .errors import ExportError, ExtractionError, PersistenceError
from .export.csv_exporter import export_plans_csv
from .interfaces import PlanExporter, PlanRepository, StructuredExtractor
from .models.lesson_plan import LessonPlan, create_lesson_plan, profile_from_plan
from .models.result import Result
from .planning.emptiness import is_empty
from .planning.merge import merge_extracted
from .resilience.circuit_breaker import CircuitBreaker, CircuitBreakerOpenError
from .utils.file_utils import generate_filename
from .validation.plan_validator import LessonPlanValidator


logger = logging.getLogger(__name__)


class LessonPlannerService:
    """
    Create, analyze, save and export lesson plans.

    Examples:
        >>> service = LessonPlannerService(extractor, store, pdf_exporter)
        >>> plan = service.new_plan()
        >>> result = service.analyze(plan, "عنوان الدرس: الفاعل ...")
        >>> if result.is_success:
        ...     plan = result.value
        >>> print(service.save(plan).message)
        تم حفظ الخطة بنجاح!
    """

    def __init__(
        self,
        extractor: StructuredExtractor,
        store: PlanRepository,
        pdf_exporter: Optional[PlanExporter] = None,
        circuit_breaker: Optional[CircuitBreaker] = None
    ):
        """
        Initialize LessonPlannerService.

        Args:
            extractor: Structured-extraction client
            store: Plan repository
            pdf_exporter: PDF exporter (optional; export_pdf fails without it)
            circuit_breaker: Breaker guarding the extractor
                (default: 3 failures, 60 second pause)
        """
        self.extractor = extractor
        self.store = store
        self.pdf_exporter = pdf_exporter
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            failure_threshold=3,
            timeout=timedelta(seconds=60),
            expected_exception=ExtractionError
        )
        self.validator = LessonPlanValidator()

        self._in_flight = set()
        self._in_flight_lock = threading.Lock()

    def new_plan(self) -> LessonPlan:
        """
        Create a new plan prefilled from the teacher profile.

        A profile that cannot be read is logged and skipped.
        """
        try:
            profile = self.store.load_profile()
        except PersistenceError as e:
            logger.error(f"Failed to load teacher profile: {e}")
            profile = {}

        return create_lesson_plan(profile)

    def open_plan(self, plan_id: str) -> Result[LessonPlan]:
        """Load a saved plan for editing."""
        try:
            plan = self.store.get(plan_id)
        except PersistenceError as e:
            logger.error(f"Failed to load plan {plan_id}: {e}")
            return Result.failure(messages.LOAD_FAILED, e)

        if plan is None:
            return Result.failure(messages.PLAN_NOT_FOUND)

        return Result.success(plan)

    def list_plans(self) -> Result[List[LessonPlan]]:
        """List all saved plans."""
        try:
            return Result.success(self.store.list_all())
        except PersistenceError as e:
            logger.error(f"Failed to list plans: {e}")
            return Result.failure(messages.LOAD_FAILED, e)

    def analyze(self, plan: LessonPlan, free_text: str) -> Result[LessonPlan]:
        """
        Extract data from free text and fill the plan's empty fields.

        At most one analysis runs per plan id; a second request for the
        same plan fails while the first is outstanding.

        Args:
            plan: Current in-edit plan (not modified)
            free_text: Lesson text pasted by the teacher

        Returns:
            Result with the merged plan, or a failure with a localized
            message (the caller keeps its current plan)
        """
        if not isinstance(free_text, str) or is_empty(free_text):
            return Result.failure(messages.EMPTY_ANALYSIS_INPUT)

        plan_id = plan.get("id")
        with self._in_flight_lock:
            if plan_id in self._in_flight:
                logger.warning(f"Analysis already running for plan {plan_id}")
                return Result.failure(messages.ANALYSIS_IN_PROGRESS)
            self._in_flight.add(plan_id)

        try:
            extracted = self.circuit_breaker.call(self.extractor.extract, free_text)

        except CircuitBreakerOpenError as e:
            logger.warning(f"Analysis paused for another {e.retry_after.total_seconds():.0f}s after repeated failures")
            return Result.failure(messages.SERVICE_UNAVAILABLE, e)

        except ExtractionError as e:
            logger.error(f"Analysis failed for plan {plan_id}: {e}")
            return Result.failure(e.user_message, e)

        finally:
            with self._in_flight_lock:
                self._in_flight.discard(plan_id)

        return Result.success(merge_extracted(plan, extracted), messages.ANALYSIS_DONE)

    def save(self, plan: LessonPlan) -> Result[LessonPlan]:
        """
        Save the plan and refresh the teacher profile from it.

        On failure the plan is not lost: the caller still holds it.
        """
        validation = self.validator.validate(plan)
        for warning in validation.warnings:
            logger.info(f"Saving plan {plan.get('id')} with warning: {warning}")

        if not validation.is_valid:
            logger.error(f"Refusing to save plan:\n{validation.get_summary()}")
            return Result.failure(messages.PLAN_INVALID, ValueError(validation.get_summary()))

        try:
            self.store.upsert(plan)
            self.store.save_profile(profile_from_plan(plan))

        except (PersistenceError, ValueError) as e:
            logger.error(f"Failed to save lesson plan: {e}")
            return Result.failure(messages.SAVE_FAILED, e)

        return Result.success(plan, messages.SAVE_SUCCEEDED)

    def export_pdf(self, plan: LessonPlan, output_dir: Path) -> Result[Path]:
        """Export the plan to a PDF file in `output_dir`."""
        if self.pdf_exporter is None:
            return Result.failure(messages.PDF_LIBRARIES_MISSING)

        try:
            path = self.pdf_exporter.export(plan, output_dir)
        except ExportError as e:
            return Result.failure(str(e) or messages.PDF_EXPORT_FAILED, e)

        return Result.success(path, messages.EXPORT_SUCCEEDED)

    def export_csv(self, output_dir: Path, filename: Optional[str] = None) -> Result[Path]:
        """Export all saved plans to a CSV file in `output_dir`."""
        plans_result = self.list_plans()
        if plans_result.is_failure:
            return Result.failure(plans_result.message, plans_result.error)

        filepath = Path(output_dir) / (filename or generate_filename("lesson_plans", "csv"))

        try:
            path = export_plans_csv(plans_result.value, filepath)
        except ExportError as e:
            return Result.failure(str(e) or messages.CSV_EXPORT_FAILED, e)

        return Result.success(path, messages.EXPORT_SUCCEEDED)
