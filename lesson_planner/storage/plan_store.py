"""
JSON file store for lesson plans and the teacher profile.

Plans live in one versioned JSON file, keyed by plan id; the teacher
profile lives in a second file. Every call reads or writes the file
directly, so the store holds no state between calls.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import PersistenceError
from ..interfaces import PlanRepository
from ..models.lesson_plan import LessonPlan, TeacherProfile, PROFILE_FIELDS
from ..models.schema_version import CURRENT_VERSION, VersionedData, migrate
from ..utils.file_utils import load_json, save_json


logger = logging.getLogger(__name__)

PLANS_FILENAME = "lesson_plans.json"
PROFILE_FILENAME = "teacher_profile.json"


class JsonPlanStore(PlanRepository):
    """
    Plan repository backed by JSON files in a data directory.

    Examples:
        >>> store = JsonPlanStore(Path("data"))
        >>> store.upsert(plan)
        >>> [p["id"] for p in store.list_all()]
        ['plan-1709500000000']
    """

    def __init__(self, data_dir: Path):
        """
        Initialize JsonPlanStore.

        Args:
            data_dir: Directory for the plan and profile files
        """
        self.data_dir = Path(data_dir)
        self.plans_path = self.data_dir / PLANS_FILENAME
        self.profile_path = self.data_dir / PROFILE_FILENAME

    def _read_plans(self) -> List[LessonPlan]:
        """
        Read and migrate the stored plans.

        Raises:
            PersistenceError: If the file exists but cannot be used
        """
        if not self.plans_path.exists():
            return []

        raw = load_json(self.plans_path)
        if not isinstance(raw, dict):
            raise PersistenceError(f"Unreadable plan file: {self.plans_path}")

        try:
            versioned = migrate(VersionedData.from_dict(raw))
        except ValueError as e:
            raise PersistenceError(f"Unsupported plan file {self.plans_path}: {e}") from e

        return versioned.data.get("plans", [])

    def _write_plans(self, plans: List[LessonPlan]):
        """
        Write all plans at the current schema version.

        Raises:
            PersistenceError: If the file cannot be written
        """
        versioned = VersionedData(
            schema_version=CURRENT_VERSION.value,
            data={"plans": plans}
        )
        if not save_json(versioned.to_dict(), self.plans_path):
            raise PersistenceError(f"Failed to write plan file: {self.plans_path}")

    def upsert(self, plan: LessonPlan) -> None:
        """
        Replace the plan with the same id, or append it.

        Raises:
            PersistenceError: If the store cannot be read or written
            ValueError: If the plan has no id
        """
        plan_id = plan.get("id")
        if not plan_id:
            raise ValueError("Cannot store a plan without id")

        plans = self._read_plans()
        stored = copy.deepcopy(plan)

        for index, existing in enumerate(plans):
            if existing.get("id") == plan_id:
                plans[index] = stored
                logger.info(f"Updated plan {plan_id}")
                break
        else:
            plans.append(stored)
            logger.info(f"Added plan {plan_id} ({len(plans)} stored)")

        self._write_plans(plans)

    def list_all(self) -> List[LessonPlan]:
        """Return all stored plans in insertion order."""
        return self._read_plans()

    def get(self, plan_id: str) -> Optional[LessonPlan]:
        """Return the plan with `plan_id`, or None."""
        for plan in self._read_plans():
            if plan.get("id") == plan_id:
                return plan
        return None

    def load_profile(self) -> TeacherProfile:
        """
        Return the saved teacher profile.

        A missing profile is an empty one; a corrupt profile is logged and
        ignored since it only prefills new plans.
        """
        if not self.profile_path.exists():
            return {}

        raw: Optional[Dict[str, Any]] = load_json(self.profile_path)
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring unreadable teacher profile: {self.profile_path}")
            return {}

        return {field: raw[field] for field in PROFILE_FIELDS if field in raw}

    def save_profile(self, profile: TeacherProfile) -> None:
        """
        Persist the teacher profile.

        Raises:
            PersistenceError: If the file cannot be written
        """
        data = {field: profile.get(field) for field in PROFILE_FIELDS}
        if not save_json(data, self.profile_path):
            raise PersistenceError(f"Failed to write teacher profile: {self.profile_path}")
        logger.debug("Teacher profile updated")
