"""
Lesson plan validators.

LessonPlanValidator performs the basic checks run before a plan is
saved. ExtractedPlanValidator checks the shape of an AI reply before it
is allowed anywhere near the merge.
"""

from typing import Any, Dict

from .validators import Validator, ValidationResult
from ..extraction.schema import (
    TEXT_FIELD_DESCRIPTIONS,
    LIST_FIELD_DESCRIPTIONS,
    OBJECTIVE_FIELD_DESCRIPTIONS,
    OBJECTIVE_REQUIRED_KEYS,
)
from ..models.catalog import DAYS, MULTI_CHOICE_FIELDS, SELECT_FIELDS, ObjectiveDomain
from ..planning.emptiness import is_empty


class LessonPlanValidator(Validator):
    """
    Validator for a lesson plan about to be saved.

    Validates:
    - Non-empty identifier
    - Weekday label (when present)
    - Date format (when present, warning only)
    - Objective identifiers present and distinct per domain
    - Catalog fields and objective levels outside their catalog
      (warning only)

    Examples:
        >>> validator = LessonPlanValidator()
        >>> result = validator.validate(create_lesson_plan())
        >>> result.is_valid
        True
    """

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate lesson plan data.

        Args:
            data: Lesson plan dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult()

        if is_empty(data.get("id")):
            result.add_error("Missing required field: id")

        day = data.get("day")
        if not is_empty(day):
            error = self.check_choice(day, DAYS, "day")
            if error:
                result.add_error(error)

        date = data.get("date")
        if not is_empty(date):
            error = self.check_date(date)
            if error:
                result.add_warning(error)

        for domain in ObjectiveDomain:
            seen = set()
            for objective in data.get(domain.field_name) or []:
                objective_id = objective.get("id")
                if is_empty(objective_id):
                    result.add_error(f"{domain.field_name} contains an objective without id")
                elif objective_id in seen:
                    result.add_error(f"Duplicate objective id in {domain.field_name}: {objective_id}")
                seen.add(objective_id)

                level = objective.get("level")
                if not is_empty(level) and level not in domain.level_values():
                    result.add_warning(f"Unknown {domain.value} level in {domain.field_name}: {level!r}")

        for name, options in SELECT_FIELDS.items():
            value = data.get(name)
            if not is_empty(value):
                error = self.check_choice(value, options, name)
                if error:
                    result.add_warning(error)

        for name, options in MULTI_CHOICE_FIELDS.items():
            unknown = [entry for entry in data.get(name) or [] if entry not in options]
            if unknown:
                result.add_warning(f"{name} entries outside the catalog: {unknown}")

        if is_empty(data.get("lesson_title")):
            result.add_warning("Lesson title is empty")

        return result


class ExtractedPlanValidator(Validator):
    """
    Validator for the raw object returned by the extraction provider.

    Errors make the whole reply unusable; warnings mark values the
    extractor drops (bad date, unknown weekday).
    """

    def validate(self, data: Any) -> ValidationResult:
        """
        Validate an extracted payload.

        Args:
            data: Object decoded from the provider's reply

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult()

        if not isinstance(data, dict):
            return result.add_error(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        for name in TEXT_FIELD_DESCRIPTIONS:
            value = data.get(name)
            if value is not None:
                error = self.check_text(value, name)
                if error:
                    result.add_error(error)

        for name in LIST_FIELD_DESCRIPTIONS:
            value = data.get(name)
            if value is not None:
                error = self.check_text_list(value, name)
                if error:
                    result.add_error(error)

        for name in OBJECTIVE_FIELD_DESCRIPTIONS:
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, list):
                result.add_error(f"{name} must be a list, got {type(value).__name__}")
                continue
            for index, objective in enumerate(value):
                self._validate_objective(objective, f"{name}[{index}]", result)

        date = data.get("date")
        if isinstance(date, str) and not is_empty(date):
            error = self.check_date(date)
            if error:
                result.add_warning(error)

        day = data.get("day")
        if day is not None and not is_empty(day):
            error = self.check_choice(day, DAYS, "day")
            if error:
                result.add_warning(error)

        return result

    def _validate_objective(self, objective: Any, label: str, result: ValidationResult):
        """Check one objective for the three required text keys."""
        if not isinstance(objective, dict):
            result.add_error(f"{label} must be an object, got {type(objective).__name__}")
            return

        for key in OBJECTIVE_REQUIRED_KEYS:
            if key not in objective or objective[key] is None:
                result.add_error(f"{label} is missing required field: {key}")
            elif not isinstance(objective[key], str):
                result.add_error(f"{label}.{key} must be a string")
