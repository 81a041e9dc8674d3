"""
Circuit breaker guarding the extraction provider.

Consecutive ExtractionErrors open the breaker. While open, analysis
requests are refused without contacting the provider; once the pause
has elapsed a single trial request is let through, and its outcome
closes or reopens the breaker.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type


logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpenError(Exception):
    """Raised instead of calling the provider while the breaker is open."""

    def __init__(self, retry_after: timedelta):
        self.retry_after = retry_after
        super().__init__(f"Circuit breaker is OPEN, retry in {retry_after.total_seconds():.0f}s")


class CircuitBreaker:
    """
    Fail fast after repeated extraction failures.

    Only `expected_exception` counts as a failure; any other exception
    passes through without touching the breaker.

    Examples:
        >>> breaker = CircuitBreaker(
        ...     failure_threshold=3,
        ...     timeout=timedelta(seconds=60),
        ...     expected_exception=ExtractionError
        ... )
        >>> partial = breaker.call(extractor.extract, text)
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        timeout: timedelta = timedelta(seconds=60),
        expected_exception: Type[Exception] = Exception,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize CircuitBreaker.

        Args:
            failure_threshold: Consecutive failures that open the breaker
            timeout: Pause before a trial request is allowed
            expected_exception: Exception type counted as a failure
            clock: Source of the current time
        """
        if failure_threshold <= 0:
            raise ValueError(f"failure_threshold must be positive, got: {failure_threshold}")

        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.expected_exception = expected_exception
        self._clock = clock

        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.last_failure_time: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    @property
    def is_closed(self) -> bool:
        return self.state == CircuitState.CLOSED

    def retry_after(self) -> timedelta:
        """Time left before a trial request is allowed (zero unless open)."""
        if not self.is_open or self.last_failure_time is None:
            return timedelta(0)
        remaining = self.last_failure_time + self.timeout - self._clock()
        return max(remaining, timedelta(0))

    def allow_request(self) -> bool:
        """
        Decide whether a request may go to the provider now.

        An open breaker whose pause has elapsed moves to HALF_OPEN and
        lets the request through as the trial.
        """
        if not self.is_open:
            return True

        if self.retry_after() > timedelta(0):
            return False

        logger.info("Extraction breaker half-open, allowing a trial request")
        self.state = CircuitState.HALF_OPEN
        return True

    def record_success(self):
        """Close the breaker and clear the failure count."""
        if self.state == CircuitState.HALF_OPEN:
            logger.info("Extraction breaker closed after successful trial")
        self.state = CircuitState.CLOSED
        self.failure_count = 0

    def record_failure(self):
        """Count a failure; open the breaker at the threshold or on a failed trial."""
        self.failure_count += 1
        self.last_failure_time = self._clock()

        if self.state == CircuitState.HALF_OPEN or self.failure_count >= self.failure_threshold:
            self.state = CircuitState.OPEN
            logger.error(
                f"Extraction breaker opened after {self.failure_count} failures, "
                f"pausing for {self.timeout.total_seconds():.0f}s"
            )
        else:
            logger.warning(f"Extraction failure {self.failure_count}/{self.failure_threshold}")

    def call(self, func: Callable, *args, **kwargs) -> Any:
        """
        Call `func` through the breaker.

        Raises:
            CircuitBreakerOpenError: If the breaker refuses the request
            Exception: Whatever `func` raises
        """
        if not self.allow_request():
            raise CircuitBreakerOpenError(self.retry_after())

        try:
            result = func(*args, **kwargs)
        except self.expected_exception:
            self.record_failure()
            raise

        self.record_success()
        return result

    def reset(self):
        """Close the breaker and forget past failures."""
        logger.info("Extraction breaker reset")
        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.last_failure_time = None

    def get_state_info(self) -> Dict[str, Any]:
        """Snapshot of the breaker for logs and diagnostics."""
        return {
            "state": self.state.value,
            "failure_count": self.failure_count,
            "failure_threshold": self.failure_threshold,
            "last_failure_time": self.last_failure_time.isoformat() if self.last_failure_time else None,
            "retry_after_seconds": self.retry_after().total_seconds(),
        }
