"""
Edit operations on an in-progress lesson plan.

Every operation takes the current plan and returns the next one; the
input plan is never modified. The plan is owned by the caller and
threaded explicitly through each edit.

Examples:
    >>> plan = create_lesson_plan()
    >>> plan = update_field(plan, "lesson_title", "الفاعل")
    >>> plan = update_field(plan, "date", "2024-03-03")
    >>> plan["day"]
    'الأحد'
    >>> plan = add_objective(plan, ObjectiveDomain.COGNITIVE)
"""

import copy
import logging
import time
from typing import Iterable, Optional, Union
from uuid import uuid4

from .weekday import derive_weekday
from ..models.catalog import MULTI_CHOICE_FIELDS, ObjectiveDomain
from ..models.lesson_plan import LessonPlan, Objective


logger = logging.getLogger(__name__)

OBJECTIVE_TEXT_FIELDS = ("level", "formulation", "evaluation")


def new_objective_id(prefix: str, taken: Iterable[str] = ()) -> str:
    """
    Create an objective identifier not present in `taken`.

    Args:
        prefix: Identifier prefix (e.g. "cog" or "new-cognitive")
        taken: Identifiers already used in the owning sequence

    Returns:
        Identifier such as "cog-1709500000000-3f9a1c2b"
    """
    taken = set(taken)
    while True:
        candidate = f"{prefix}-{int(time.time() * 1000)}-{uuid4().hex[:8]}"
        if candidate not in taken:
            return candidate


def update_field(plan: LessonPlan, name: str, value) -> LessonPlan:
    """
    Set a single field.

    Editing `date` goes through set_date() so `day` follows it.

    Args:
        plan: Current plan
        name: Field name
        value: New value

    Returns:
        Updated plan

    Raises:
        KeyError: If `name` is not a lesson plan field
    """
    if name not in plan:
        raise KeyError(f"Unknown lesson plan field: {name}")

    if name == "date":
        return set_date(plan, value)

    updated = copy.deepcopy(plan)
    updated[name] = copy.deepcopy(value)
    return updated


def set_date(plan: LessonPlan, date_text: str) -> LessonPlan:
    """
    Set the lesson date and derive its weekday.

    An invalid date is still stored as typed; the weekday then keeps
    its previous value.
    """
    updated = copy.deepcopy(plan)
    updated["date"] = date_text
    updated["day"] = derive_weekday(date_text, previous=plan.get("day"))
    return updated


def toggle_choice(plan: LessonPlan, field: str, value: str) -> LessonPlan:
    """
    Add `value` to a multi-choice field, or remove it if already chosen.

    Only catalog entries can be added. An entry already in the plan can
    always be removed, even if it came from an analysis and is not in
    the catalog.

    Args:
        plan: Current plan
        field: "teaching_methods" or "teaching_aids"
        value: Catalog entry to toggle

    Returns:
        Updated plan

    Raises:
        ValueError: If `field` is not a multi-choice field, or `value` is
            neither chosen already nor in the field's catalog
    """
    catalog = MULTI_CHOICE_FIELDS.get(field)
    if catalog is None:
        raise ValueError(f"{field} is not a multi-choice field")

    current = list(plan.get(field) or [])
    if value in current:
        current = [item for item in current if item != value]
    elif value in catalog:
        current.append(value)
    else:
        raise ValueError(f"{value!r} is not in the {field} catalog")

    updated = copy.deepcopy(plan)
    updated[field] = current
    return updated


def set_emblem(plan: LessonPlan, number: int, image: Optional[str]) -> LessonPlan:
    """
    Replace one of the two header emblems.

    Args:
        plan: Current plan
        number: 1 or 2
        image: Image data URL, or None to clear it

    Raises:
        ValueError: If `number` is not 1 or 2
    """
    if number not in (1, 2):
        raise ValueError(f"Emblem number must be 1 or 2, got {number}")

    updated = copy.deepcopy(plan)
    updated[f"emblem{number}"] = image
    return updated


def _domain(domain: Union[ObjectiveDomain, str]) -> ObjectiveDomain:
    return domain if isinstance(domain, ObjectiveDomain) else ObjectiveDomain(domain)


def add_objective(plan: LessonPlan, domain: Union[ObjectiveDomain, str]) -> LessonPlan:
    """
    Append a blank objective to a domain's sequence.

    The new objective gets an identifier distinct from every other
    objective in that sequence.
    """
    domain = _domain(domain)
    objectives = copy.deepcopy(plan.get(domain.field_name) or [])

    objective: Objective = {
        "id": new_objective_id(f"new-{domain.value}", (o["id"] for o in objectives)),
        "level": "",
        "formulation": "",
        "evaluation": "",
    }
    objectives.append(objective)

    updated = copy.deepcopy(plan)
    updated[domain.field_name] = objectives
    logger.debug(f"Added {domain.value} objective {objective['id']}")
    return updated


def update_objective(
    plan: LessonPlan,
    domain: Union[ObjectiveDomain, str],
    index: int,
    field: str,
    value: str
) -> LessonPlan:
    """
    Change one text field of the objective at `index`.

    A non-empty `level` must belong to the domain's taxonomy; an empty
    one clears it.

    Raises:
        ValueError: If `field` is not level, formulation or evaluation,
            or `level` is not a level of the domain
        IndexError: If there is no objective at `index`
    """
    if field not in OBJECTIVE_TEXT_FIELDS:
        raise ValueError(f"Cannot edit objective field: {field}")

    domain = _domain(domain)
    if field == "level" and value and value not in domain.level_values():
        raise ValueError(f"{value!r} is not a {domain.value} level")

    objectives = copy.deepcopy(plan.get(domain.field_name) or [])
    if not 0 <= index < len(objectives):
        raise IndexError(f"No {domain.value} objective at index {index}")

    objectives[index][field] = value

    updated = copy.deepcopy(plan)
    updated[domain.field_name] = objectives
    return updated


def remove_objective(
    plan: LessonPlan,
    domain: Union[ObjectiveDomain, str],
    objective_id: str
) -> LessonPlan:
    """Remove the objective with `objective_id` from a domain's sequence."""
    domain = _domain(domain)

    updated = copy.deepcopy(plan)
    updated[domain.field_name] = [
        objective
        for objective in updated.get(domain.field_name) or []
        if objective["id"] != objective_id
    ]
    return updated
