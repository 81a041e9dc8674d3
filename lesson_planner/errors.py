"""
Exception hierarchy for the lesson planner.

Library code raises these; LessonPlannerService converts them into
Result failures carrying a localized message for the end user.
"""

from typing import Optional


class LessonPlannerError(Exception):
    """Base class for all lesson planner errors."""
    pass


class ExtractionError(LessonPlannerError):
    """
    Raised when AI extraction of a lesson plan fails.

    Covers missing or rejected credentials, an unreachable service and
    replies that cannot be parsed into the lesson plan shape.

    Attributes:
        user_message: Localized message safe to show to the end user
        cause: Optional technical detail (for logs only)

    Examples:
        >>> try:
        ...     extractor.extract(text)
        ... except ExtractionError as e:
        ...     print(e.user_message)
    """

    def __init__(self, user_message: str, cause: Optional[str] = None):
        self.user_message = user_message
        self.cause = cause
        detail = f"{user_message} ({cause})" if cause else user_message
        super().__init__(detail)


class DateParseWarning(ValueError):
    """
    Raised by parse_lesson_date() for text that is not a YYYY-MM-DD date.

    derive_weekday() recovers from it by logging and keeping the
    previous weekday label, so callers normally never see it.
    """
    pass


class PersistenceError(LessonPlannerError):
    """Raised when the plan store cannot be read or written."""
    pass


class ExportError(LessonPlannerError):
    """Raised when a PDF or CSV export cannot be produced."""
    pass
