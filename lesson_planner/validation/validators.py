"""
Validation framework for lesson plan data.

A Validator inspects one kind of document and reports problems in a
ValidationResult. Errors make the document unusable; warnings are
logged and the document is accepted.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from ..errors import DateParseWarning
from ..planning.weekday import parse_lesson_date


@dataclass
class ValidationResult:
    """
    Problems found in one document.

    Attributes:
        errors: Problems that make the document unusable
        warnings: Problems that are only reported

    Examples:
        >>> result = ValidationResult()
        >>> result.add_warning("Lesson title is empty").is_valid
        True
    """

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True while no error has been recorded."""
        return not self.errors

    def add_error(self, message: str) -> 'ValidationResult':
        """Record an error and return self."""
        self.errors.append(message)
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """Record a warning and return self."""
        self.warnings.append(message)
        return self

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def get_summary(self) -> str:
        """
        Describe the result for logs, one problem per line.

        Returns:
            "Validation passed", or lines prefixed with "error:" or "warning:"
        """
        if not self.errors and not self.warnings:
            return "Validation passed"

        lines = [f"error: {message}" for message in self.errors]
        lines += [f"warning: {message}" for message in self.warnings]
        return "\n".join(lines)


class Validator(ABC):
    """
    Base class for document validators.

    Subclasses implement validate(). The check_* helpers return an error
    message, or None when the value is acceptable, so a subclass decides
    whether a failed check is an error or a warning.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate one document.

        Args:
            data: Document to inspect

        Returns:
            ValidationResult with errors and warnings
        """

    def check_date(self, value: Any, field_name: str = "date") -> Optional[str]:
        """Check that value is a real calendar date written as YYYY-MM-DD."""
        try:
            parse_lesson_date(value)
        except DateParseWarning:
            return f"Invalid {field_name}: {value!r} (expected YYYY-MM-DD)"
        return None

    def check_text(self, value: Any, field_name: str) -> Optional[str]:
        """Check that value is a string."""
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"
        return None

    def check_text_list(self, value: Any, field_name: str) -> Optional[str]:
        """Check that value is a list whose items are all strings."""
        if not isinstance(value, list):
            return f"{field_name} must be a list, got {type(value).__name__}"

        for index, item in enumerate(value):
            if not isinstance(item, str):
                return f"{field_name}[{index}] must be a string, got {type(item).__name__}"

        return None

    def check_choice(self, value: Any, choices: Iterable[str], field_name: str) -> Optional[str]:
        """Check that value is one of `choices`."""
        choices = list(choices)
        if value not in choices:
            return f"Invalid {field_name}: {value!r} (must be one of: {', '.join(choices)})"
        return None
