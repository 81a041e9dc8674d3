"""
Lesson plan data models with type safety.

This module provides TypedDict definitions for lesson plans, their
behavioral objectives and the teacher profile, plus the factory that
creates a new plan with locale defaults.
"""

from datetime import datetime
from typing import TypedDict, List, Optional, Dict, Any

from .catalog import ObjectiveDomain
from ..planning.weekday import derive_weekday


class Objective(TypedDict):
    """
    One behavioral objective (TypedDict for type safety).

    Attributes:
        id: Identifier, unique within its owning sequence
        level: Taxonomy level of the objective's domain
        formulation: Wording of the objective
        evaluation: How attainment of the objective is evaluated

    Examples:
        >>> objective: Objective = {
        ...     "id": "cog-1709500000000-0",
        ...     "level": "تذكر",
        ...     "formulation": "أن يعرّف الطالب الفاعل",
        ...     "evaluation": "عرّف الفاعل؟"
        ... }
    """

    id: str
    level: str
    formulation: str
    evaluation: str


class LessonPlan(TypedDict):
    """
    Lesson plan document (TypedDict for type safety).

    Text fields hold plain strings, `day` is one of catalog.DAYS (or
    empty), `date` uses YYYY-MM-DD, emblems are image data URLs.

    Examples:
        >>> plan = create_lesson_plan()
        >>> plan["id"].startswith("plan-")
        True
    """

    id: str
    emblem1: Optional[str]
    emblem2: Optional[str]
    republic_name: str
    ministry: str
    education_area: str
    school_name: str
    day: str
    date: str
    subject: str
    lesson_title: str
    grade: str
    section: str
    period: str
    behavior: str
    teaching_methods: List[str]
    teaching_aids: List[str]
    lesson_intro: str
    intro_type: str
    activities: str
    cognitive_objectives: List[Objective]
    psychomotor_objectives: List[Objective]
    affective_objectives: List[Objective]
    teacher_role: str
    student_role: str
    lesson_content: str
    lesson_closure: str
    closure_type: str
    homework: str
    homework_type: str
    admin_notes: str
    praise: str
    teacher_name: str


class PartialLessonPlan(TypedDict, total=False):
    """
    Lesson plan with any subset of fields present.

    Produced by the extraction client. A key may be absent, present but
    empty, or present with a value.
    """

    id: str
    emblem1: Optional[str]
    emblem2: Optional[str]
    republic_name: str
    ministry: str
    education_area: str
    school_name: str
    day: str
    date: str
    subject: str
    lesson_title: str
    grade: str
    section: str
    period: str
    behavior: str
    teaching_methods: List[str]
    teaching_aids: List[str]
    lesson_intro: str
    intro_type: str
    activities: str
    cognitive_objectives: List[Objective]
    psychomotor_objectives: List[Objective]
    affective_objectives: List[Objective]
    teacher_role: str
    student_role: str
    lesson_content: str
    lesson_closure: str
    closure_type: str
    homework: str
    homework_type: str
    admin_notes: str
    praise: str
    teacher_name: str


class TeacherProfile(TypedDict, total=False):
    """Header and signature fields carried over to new plans."""

    education_area: str
    school_name: str
    emblem1: Optional[str]
    emblem2: Optional[str]
    teacher_name: str


PROFILE_FIELDS = ("education_area", "school_name", "emblem1", "emblem2", "teacher_name")

OBJECTIVE_FIELDS = tuple(domain.field_name for domain in ObjectiveDomain)

LIST_FIELDS = ("teaching_methods", "teaching_aids") + OBJECTIVE_FIELDS

# Locale defaults for a new plan
DEFAULT_VALUES: Dict[str, Any] = {
    "republic_name": "الجمهورية اليمنية",
    "ministry": "وزارة التربية والتعليم",
    "behavior": "سلوك متوقع إيجابي",
    "teacher_role": "موجه ومرشد",
    "student_role": "مشارك ومتفاعل",
    "homework_type": "واجب منزلي",
    "praise": "ثناء وتشجيع",
}


def new_plan_id(now: Optional[datetime] = None) -> str:
    """
    Create a plan identifier stamped from creation time.

    Args:
        now: Creation time (default: current local time)

    Returns:
        Identifier such as "plan-1709500000000"
    """
    now = now or datetime.now()
    return f"plan-{int(now.timestamp() * 1000)}"


def create_lesson_plan(
    profile: Optional[TeacherProfile] = None,
    now: Optional[datetime] = None
) -> LessonPlan:
    """
    Create a new in-memory lesson plan.

    The plan gets a fresh id, the locale defaults, today's date with its
    weekday, and the teacher profile fields on top.

    Args:
        profile: Teacher profile to prefill header fields (optional)
        now: Creation time (default: current local time)

    Returns:
        New LessonPlan

    Examples:
        >>> plan = create_lesson_plan({"school_name": "مدرسة الوحدة"})
        >>> plan["school_name"]
        'مدرسة الوحدة'
    """
    now = now or datetime.now()
    today = now.strftime("%Y-%m-%d")

    plan: LessonPlan = {
        "id": new_plan_id(now),
        "emblem1": None,
        "emblem2": None,
        "republic_name": "",
        "ministry": "",
        "education_area": "",
        "school_name": "",
        "day": derive_weekday(today, previous="") or "",
        "date": today,
        "subject": "",
        "lesson_title": "",
        "grade": "",
        "section": "",
        "period": "",
        "behavior": "",
        "teaching_methods": [],
        "teaching_aids": [],
        "lesson_intro": "",
        "intro_type": "",
        "activities": "",
        "cognitive_objectives": [],
        "psychomotor_objectives": [],
        "affective_objectives": [],
        "teacher_role": "",
        "student_role": "",
        "lesson_content": "",
        "lesson_closure": "",
        "closure_type": "",
        "homework": "",
        "homework_type": "",
        "admin_notes": "",
        "praise": "",
        "teacher_name": "",
    }
    plan.update(DEFAULT_VALUES)

    if profile:
        for field in PROFILE_FIELDS:
            if field in profile:
                plan[field] = profile[field]

    return plan


def profile_from_plan(plan: LessonPlan) -> TeacherProfile:
    """
    Derive the teacher profile from a saved plan.

    Args:
        plan: Lesson plan that was just saved

    Returns:
        TeacherProfile with the header and signature fields
    """
    return {field: plan.get(field) for field in PROFILE_FIELDS}
