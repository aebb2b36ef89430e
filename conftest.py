"""
Common test fixtures and utilities for all tests in the project.
"""
import re
import pytest
from contextlib import contextmanager


@contextmanager
def assert_raises(exception_type, match=None):
    """
    A cleaner alternative to pytest.raises that doesn't produce nested exception traces.

    Args:
        exception_type: The exception type that should be raised
        match: Optional regex pattern that the exception message should match

    Raises:
        AssertionError: If no exception is raised or if the exception doesn't match
                       the expected type or pattern
    """
    try:
        yield
        pytest.fail(f"Expected {exception_type.__name__} to be raised, but no exception was raised")
    except exception_type as exc:
        if match is not None:
            message = str(exc)
            if not re.search(match, message):
                pytest.fail(
                    f"Expected exception message to match '{match}', but got: '{message}'"
                )
    except Exception as exc:
        pytest.fail(
            f"Expected {exception_type.__name__} to be raised, but got {type(exc).__name__}: {exc}"
        )


class FakeClock:
    """Monotonic clock whose time only moves when a test advances it."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def fake_clock() -> FakeClock:
    """A clock starting at an arbitrary non-zero instant."""
    return FakeClock()
