"""
Merge AI-extracted data into an in-progress lesson plan.

The merge only fills gaps: a field the user (or an earlier merge) has
already filled is never overwritten. The one exception is `day`, which
follows the extracted value when the extracted `date` was just accepted
so that the two stay consistent.
"""

import copy
import logging
from typing import Mapping, Any

from .emptiness import is_empty
from ..models.lesson_plan import LessonPlan, PartialLessonPlan


logger = logging.getLogger(__name__)

COUPLED_FIELD = "day"


def merge_extracted(current: LessonPlan, extracted: PartialLessonPlan) -> LessonPlan:
    """
    Merge an extracted partial plan into the current plan.

    Neither argument is modified; the result shares no mutable values
    with them.

    Args:
        current: Plan being edited
        extracted: Partial plan returned by the extraction client

    Returns:
        New plan with empty fields filled from `extracted`

    Examples:
        >>> current = {"id": "plan-1", "date": "", "day": "الأحد", "subject": ""}
        >>> extracted = {"date": "2024-03-04", "day": "الاثنين", "subject": "العلوم"}
        >>> merged = merge_extracted(current, extracted)
        >>> merged["date"], merged["day"], merged["subject"]
        ('2024-03-04', 'الاثنين', 'العلوم')
    """
    result = copy.deepcopy(dict(current))
    filled = []

    for field, value in extracted.items():
        if field == COUPLED_FIELD:
            continue

        if is_empty(value):
            continue

        if not is_empty(current.get(field)):
            continue

        result[field] = copy.deepcopy(value)
        filled.append(field)

    if _date_changed(current, result) and not is_empty(extracted.get(COUPLED_FIELD)):
        result[COUPLED_FIELD] = extracted[COUPLED_FIELD]
        filled.append(COUPLED_FIELD)

    logger.debug(f"Merged extracted fields into plan {current.get('id')}: {filled}")
    return result


def _date_changed(before: Mapping[str, Any], after: Mapping[str, Any]) -> bool:
    """Check whether the merge accepted a new date."""
    return after.get("date") != before.get("date")
