"""
Lesson planner.

Compose, analyze, save and export daily lesson plans.

Usage:
    >>> from lesson_planner import create_lesson_plan, merge_extracted
    >>>
    >>> plan = create_lesson_plan()
    >>> plan = merge_extracted(plan, {"subject": "العلوم"})
"""

from .errors import (
    DateParseWarning,
    ExportError,
    ExtractionError,
    LessonPlannerError,
    PersistenceError,
)
from .models.lesson_plan import LessonPlan, Objective, PartialLessonPlan, create_lesson_plan
from .planning.emptiness import is_empty
from .planning.merge import merge_extracted
from .planning.weekday import derive_weekday

__all__ = [
    "DateParseWarning",
    "ExportError",
    "ExtractionError",
    "LessonPlannerError",
    "PersistenceError",
    "LessonPlan",
    "Objective",
    "PartialLessonPlan",
    "create_lesson_plan",
    "is_empty",
    "merge_extracted",
    "derive_weekday",
]

__version__ = "0.1.0"
