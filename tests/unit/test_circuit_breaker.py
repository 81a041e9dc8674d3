"""
Unit tests for Circuit Breaker pattern.
"""

from datetime import datetime, timedelta

import pytest

from lesson_planner.errors import ExtractionError
from lesson_planner.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self):
        self.now = datetime(2024, 3, 3, 9, 0)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


def failing_extract(text):
    raise ExtractionError("فشل", cause="test")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def breaker(clock):
    return CircuitBreaker(
        failure_threshold=2,
        timeout=timedelta(seconds=60),
        expected_exception=ExtractionError,
        clock=clock
    )


class TestCircuitBreaker:
    """Test cases for CircuitBreaker."""

    def test_initial_state_closed(self, breaker):
        """Test circuit breaker starts in CLOSED state."""
        assert breaker.state == CircuitState.CLOSED
        assert breaker.is_closed
        assert not breaker.is_open
        assert breaker.failure_count == 0

    def test_successful_call(self, breaker):
        """Test successful function call passes through."""
        assert breaker.call(lambda text: {"subject": text}, "العلوم") == {"subject": "العلوم"}
        assert breaker.failure_count == 0

    def test_failure_increments_count(self, breaker):
        """Test failure increments counter."""
        with pytest.raises(ExtractionError):
            breaker.call(failing_extract, "x")

        assert breaker.failure_count == 1
        assert breaker.is_closed

    def test_circuit_opens_after_threshold(self, breaker):
        """Test circuit opens after reaching failure threshold."""
        for _ in range(2):
            with pytest.raises(ExtractionError):
                breaker.call(failing_extract, "x")

        assert breaker.is_open

        with pytest.raises(CircuitBreakerOpenError):
            breaker.call(lambda: "never called")

    def test_unexpected_exception_not_counted(self, breaker):
        """Test exceptions other than expected_exception are not counted."""
        def broken():
            raise KeyError("x")

        with pytest.raises(KeyError):
            breaker.call(broken)

        assert breaker.failure_count == 0

    def test_half_open_success_closes(self, breaker, clock):
        """Test a successful trial call after the timeout closes the circuit."""
        for _ in range(2):
            with pytest.raises(ExtractionError):
                breaker.call(failing_extract, "x")

        clock.advance(61)

        assert breaker.call(lambda: "ok") == "ok"
        assert breaker.is_closed
        assert breaker.failure_count == 0

    def test_half_open_failure_reopens(self, breaker, clock):
        """Test a failed trial call reopens the circuit immediately."""
        for _ in range(2):
            with pytest.raises(ExtractionError):
                breaker.call(failing_extract, "x")

        clock.advance(61)

        with pytest.raises(ExtractionError):
            breaker.call(failing_extract, "x")

        assert breaker.is_open

    def test_stays_open_before_timeout(self, breaker, clock):
        """Test calls are blocked until the timeout has passed."""
        for _ in range(2):
            with pytest.raises(ExtractionError):
                breaker.call(failing_extract, "x")

        clock.advance(30)

        with pytest.raises(CircuitBreakerOpenError):
            breaker.call(lambda: "ok")

    def test_reset(self, breaker):
        """Test manual reset closes the circuit."""
        for _ in range(2):
            with pytest.raises(ExtractionError):
                breaker.call(failing_extract, "x")

        breaker.reset()

        assert breaker.is_closed
        assert breaker.last_failure_time is None

    def test_get_state_info(self, breaker, clock):
        """Test state info reports state and last failure."""
        with pytest.raises(ExtractionError):
            breaker.call(failing_extract, "x")

        info = breaker.get_state_info()

        assert info["state"] == "closed"
        assert info["failure_count"] == 1
        assert info["last_failure_time"] == clock.now.isoformat()
        assert info["failure_threshold"] == 2

    def test_retry_after(self, breaker, clock):
        """Test the open breaker reports the remaining pause."""
        for _ in range(2):
            with pytest.raises(ExtractionError):
                breaker.call(failing_extract, "x")

        clock.advance(20)

        with pytest.raises(CircuitBreakerOpenError) as exc_info:
            breaker.call(lambda: "ok")

        assert exc_info.value.retry_after == timedelta(seconds=40)
        assert breaker.get_state_info()["retry_after_seconds"] == 40

    def test_invalid_threshold(self):
        """Test a non-positive threshold is rejected."""
        with pytest.raises(ValueError):
            CircuitBreaker(failure_threshold=0)
