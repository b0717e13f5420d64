"""Assertion engine adapter and assertion counting.

Every pass/fail decision made by the DSL is delegated to the assertion
methods of `unittest.TestCase`. The adapter defined here exposes them
under the names used by matchers and expectations and counts each call
in an `AssertionTally`, so the suite lifecycle can report how many
assertions a test unit made.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any
from unittest import TestCase

if TYPE_CHECKING:
    from collections.abc import Iterator

if TYPE_CHECKING:
    from pytest_should.matchers.base import Matcher
    from pytest_should.values import DeferredAction, Subject

_COUNTER: ContextVar[int] = ContextVar('pytest_should_assertions', default=0)


class TallySession:
    """Assertion count captured for one test unit execution."""

    __slots__ = ('count',)

    def __init__(self) -> None:
        """Initialize an empty session."""
        self.count = 0


class AssertionTally:
    """Running count of assertions made through the engine.

    The counter is stored in a context variable. Sequential runs share a
    single process-wide value; runs in separate threads or asyncio tasks
    each observe their own value, so a parallel runner never mixes the
    counts of concurrently executing units.
    """

    @property
    def count(self) -> int:
        """Return the current number of assertions."""
        return _COUNTER.get()

    def reset(self) -> None:
        """Reset the counter to zero."""
        _COUNTER.set(0)

    def increment(self) -> None:
        """Record one assertion."""
        _COUNTER.set(_COUNTER.get() + 1)

    @contextmanager
    def session(self) -> 'Iterator[TallySession]':
        """Measure the assertions made inside the block.

        The counter is reset on entry. On exit, whether the block
        succeeded or raised, the counter value is stored in the
        yielded session and the counter is reset again.

        Yields:
            Session whose `count` is filled in on exit.
        """
        session = TallySession()
        self.reset()
        try:
            yield session
        finally:
            session.count = self.count
            self.reset()


class AssertionEngine:
    """Counting adapter over `unittest.TestCase` assertions.

    Each primitive records exactly one assertion in the tally before
    delegating, so failing assertions are counted as well.
    """

    def __init__(self, tally: AssertionTally | None = None) -> None:
        """Initialize the engine.

        Args:
            tally: Counter receiving one increment per assertion.
        """
        self.tally = tally or AssertionTally()

        self._case = TestCase()
        self._case.maxDiff = None

    def assert_equal(self, expected: 'Subject', actual: 'Subject') -> bool:
        """Assert that two values are equal."""
        self.tally.increment()
        self._case.assertEqual(expected, actual)

        return True

    def refute_equal(self, expected: 'Subject', actual: 'Subject') -> bool:
        """Assert that two values are not equal."""
        self.tally.increment()
        self._case.assertNotEqual(expected, actual)

        return True

    def assert_operator(self, matcher: 'Matcher', subject: 'Subject') -> bool:
        """Assert that a matcher matches a subject.

        Args:
            matcher: Matcher to evaluate.
            subject: Value or deferred action passed to the matcher.

        Returns:
            True when the assertion holds.

        Raises:
            AssertionError: If the matcher does not match.
        """
        self.tally.increment()
        self._case.assertTrue(
            matcher.matches(subject),
            f'Expected {subject!r} to {matcher.describe()}',
        )

        return True

    def refute_operator(self, matcher: 'Matcher', subject: 'Subject') -> bool:
        """Assert that a matcher does not match a subject.

        Args:
            matcher: Matcher to evaluate.
            subject: Value or deferred action passed to the matcher.

        Returns:
            True when the assertion holds.

        Raises:
            AssertionError: If the matcher matches.
        """
        self.tally.increment()
        self._case.assertFalse(
            matcher.matches(subject),
            f'Expected {subject!r} not to {matcher.describe()}',
        )

        return True

    def assert_raises(self, expected: type[BaseException] | tuple[type[BaseException], ...],
                      action: 'DeferredAction') -> BaseException:
        """Assert that a deferred action raises an error of the given kind.

        An error of any other kind is reported as an assertion failure
        rather than propagated.

        Args:
            expected: Exception class (or classes) the action must raise.
            action: Zero-argument callable to run.

        Returns:
            The raised exception.

        Raises:
            AssertionError: If nothing or an error of another kind was raised.
        """
        self.tally.increment()

        try:
            action()
        except expected as error:
            return error
        except Exception as error:  # noqa: BLE001
            raise self._case.failureException(
                f'{_kind_name(expected)} expected but {error!r} was raised',
            ) from error

        raise self._case.failureException(f'{_kind_name(expected)} expected but nothing was raised')

    def fail(self, message: str) -> None:
        """Record a failed assertion.

        Raises:
            AssertionError: Always.
        """
        self.tally.increment()
        self._case.fail(message)


def _kind_name(kind: Any) -> str:  # noqa: ANN401
    """Render an exception class or a tuple of them."""
    if isinstance(kind, tuple):
        return ' or '.join(item.__name__ for item in kind)

    return kind.__name__


#: Process-wide tally consumed by the suite lifecycle.
tally = AssertionTally()

#: Engine used by matchers and expectations.
engine = AssertionEngine(tally)
