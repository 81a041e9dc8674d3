"""
Abstract interfaces for the planner's external collaborators.

This module defines abstract base classes that enable dependency
inversion: LessonPlannerService depends on these, and tests substitute
mocks for the AI provider, the store and the PDF renderer.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .models.lesson_plan import LessonPlan, PartialLessonPlan, TeacherProfile


class StructuredExtractor(ABC):
    """
    Turns free lesson text into a partial lesson plan.

    Implementations must assign fresh objective identifiers and raise
    ExtractionError for every failure.
    """

    @abstractmethod
    def extract(self, free_text: str) -> PartialLessonPlan:
        """
        Extract a best-effort partial plan from free text.

        Args:
            free_text: Non-empty lesson text

        Returns:
            Partial plan conforming to the lesson plan schema

        Raises:
            ExtractionError: If the service fails or the reply is malformed
        """
        pass


class PlanRepository(ABC):
    """
    Durable keyed collection of lesson plans.

    Implementations raise PersistenceError on read/write failures.
    """

    @abstractmethod
    def upsert(self, plan: LessonPlan) -> None:
        """Replace the plan with the same id, or append it."""
        pass

    @abstractmethod
    def list_all(self) -> List[LessonPlan]:
        """Return all stored plans in insertion order."""
        pass

    @abstractmethod
    def get(self, plan_id: str) -> Optional[LessonPlan]:
        """Return the plan with `plan_id`, or None."""
        pass

    @abstractmethod
    def load_profile(self) -> TeacherProfile:
        """Return the saved teacher profile (empty if none)."""
        pass

    @abstractmethod
    def save_profile(self, profile: TeacherProfile) -> None:
        """Persist the teacher profile."""
        pass


class PlanExporter(ABC):
    """Writes a lesson plan to a printable file."""

    @abstractmethod
    def export(self, plan: LessonPlan, output_dir: Path) -> Path:
        """
        Export `plan` into `output_dir`.

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file cannot be produced
        """
        pass
