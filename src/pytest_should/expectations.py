"""Expectation binding: `should` and `should_not`.

Expectations are made about an explicitly wrapped subject instead of
augmenting every object:

    expect(account.balance).should() == 100
    expect(account).should(be_active())
    expect(running(account.close)).should_not(change(lambda: account.balance).from_(0))

The free functions `should` and `should_not` take the subject as their
first argument and behave the same way.
"""

from typing import TYPE_CHECKING, Generic, TypeVar

from pytest_should.engine import engine
from pytest_should.errors import UnknownMatcherError
from pytest_should.matchers import DefaultEqualMatcher, DefaultNotEqualMatcher, Matcher

if TYPE_CHECKING:
    from pytest_should.values import Subject


def _ensure_matcher(matcher: object) -> Matcher:
    """Reject anything that is not a matcher.

    Raises:
        UnknownMatcherError: If `matcher` is not a `Matcher` instance.
    """
    if not isinstance(matcher, Matcher):
        raise UnknownMatcherError(f'{matcher!r} is not a matcher')

    return matcher


T = TypeVar('T')


class Expectation(Generic[T]):
    """Subject wrapper exposing `should` and `should_not`.

    Every call results in one assertion made through the engine.
    """

    __slots__ = ('subject',)

    def __init__(self, subject: T) -> None:
        """Wrap a subject.

        Args:
            subject: Value, or deferred action for matchers that
                control execution.
        """
        self.subject = subject

    def __repr__(self) -> str:
        """String represenatation."""
        return f'{type(self).__name__}({self.subject!r})'

    def should(self, matcher: Matcher | None = None) -> DefaultEqualMatcher | bool:
        """Expect the subject to satisfy a matcher.

        Args:
            matcher: Matcher to evaluate. Without one, an equality
                matcher is returned and the assertion is made when it
                is compared with `==`.

        Returns:
            The implicit equality matcher, or True once the assertion holds.

        Raises:
            AssertionError: If the matcher does not match.
            UnknownMatcherError: If `matcher` is not a matcher.
        """
        if matcher is None:
            return DefaultEqualMatcher(expected=self.subject)

        return engine.assert_operator(_ensure_matcher(matcher), self.subject)

    def should_not(self, matcher: Matcher | None = None) -> DefaultNotEqualMatcher | bool:
        """Expect the subject not to satisfy a matcher.

        Args:
            matcher: Matcher to evaluate. Without one, an inequality
                matcher is returned and the assertion is made when it
                is compared with `==`.

        Returns:
            The implicit inequality matcher, or True once the assertion holds.

        Raises:
            AssertionError: If the matcher matches.
            UnknownMatcherError: If `matcher` is not a matcher.
        """
        if matcher is None:
            return DefaultNotEqualMatcher(expected=self.subject)

        return engine.refute_operator(_ensure_matcher(matcher), self.subject)


def expect(subject: T) -> Expectation[T]:
    """Wrap a subject into an expectation."""
    return Expectation(subject)


def should(subject: 'Subject', matcher: Matcher | None = None) -> DefaultEqualMatcher | bool:
    """Expect `subject` to satisfy `matcher`. See `Expectation.should`."""
    return Expectation(subject).should(matcher)


def should_not(subject: 'Subject', matcher: Matcher | None = None) -> DefaultNotEqualMatcher | bool:
    """Expect `subject` not to satisfy `matcher`. See `Expectation.should_not`."""
    return Expectation(subject).should_not(matcher)
