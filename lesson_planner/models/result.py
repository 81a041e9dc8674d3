"""
Result type returned by LessonPlannerService.

No failure reaches the caller of the service as an exception. Each
operation returns a Result whose message is the localized text to show
the teacher and whose error keeps the cause for the logs.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar


T = TypeVar('T')
U = TypeVar('U')


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        ok: Whether the operation succeeded
        value: Produced value (None on failure)
        message: Localized message for the teacher, if any
        error: Exception behind a failure, if any

    Examples:
        >>> result = service.save(plan)
        >>> print(result.message)
        تم حفظ الخطة بنجاح!
        >>> result = service.open_plan("plan-0")
        >>> result.is_failure, result.value
        (True, None)
    """

    ok: bool
    value: Optional[T] = None
    message: Optional[str] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, message: str, error: Optional[Exception] = None) -> 'Result[T]':
        return cls(ok=False, message=message, error=error)

    @property
    def is_success(self) -> bool:
        return self.ok

    @property
    def is_failure(self) -> bool:
        return not self.ok

    def unwrap(self) -> T:
        """
        Return the value of a success.

        Raises:
            ValueError: If called on a failure
        """
        if not self.ok:
            raise ValueError(f"Cannot unwrap failure result: {self.message}")
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Transform the value of a success.

        Failures pass through; an exception from `func` becomes a failure.

        Examples:
            >>> service.list_plans().map(len).value
            3
        """
        if not self.ok:
            return Result.failure(self.message, self.error)

        try:
            return Result.success(func(self.value), self.message)
        except Exception as e:
            return Result.failure(str(e), e)
