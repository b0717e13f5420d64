"""Built-in matcher variants.

This module defines the closed family of matchers understood by the DSL:
predicate, error, change, strict equality, literal identity, pattern,
and the implicit equality matchers returned by `should()` and
`should_not()` when no explicit matcher is given.
"""

from collections.abc import Callable
from re import Pattern
from typing import Any, ClassVar, Self

from pydantic import Field

from pytest_should.engine import engine
from pytest_should.errors import ShouldRuntimeError, UnsupportedPredicateError
from pytest_should.values import MAPPINGS

from .base import Matcher

#: Prefixes marking an attribute name as a predicate.
PREDICATE_PREFIXES = ('is_', 'has_')

#: Predicates every object supports, looked up after the subject's own attributes.
UNIVERSAL_PREDICATES: dict[str, Callable[..., bool]] = {
    'instance_of': lambda subject, kind: type(subject) is kind,
    'kind_of': isinstance,
}


class PredicateMatcher(Matcher):
    """Matcher calling a boolean predicate on the subject.

    The predicate is looked up by naming convention: `is_<name>` first,
    then `is<name>` (as in `str.isdigit`), then `<name>` itself. Callable
    attributes are called with the stored arguments, other attributes
    (for example, properties) are used as they are.
    """

    verb: ClassVar[str] = 'be'

    predicate: str = Field(
        title='Predicate fragment',
        description='Lower-cased predicate name without the `is_` marker.',
    )
    args: tuple[Any, ...] = Field(
        default=(),
        title='Positional arguments',
    )
    kwargs: dict[str, Any] = Field(
        default_factory=dict,
        title='Keyword arguments',
    )

    @property
    def candidates(self) -> tuple[str, ...]:
        """Attribute names tried on the subject, in lookup order."""
        if self.predicate.startswith(PREDICATE_PREFIXES):
            return (self.predicate,)

        return tuple(dict.fromkeys((
            f'is_{self.predicate}',
            f'is{self.predicate.replace("_", "")}',
            self.predicate,
        )))

    def matches(self, subject: Any) -> bool:  # noqa: ANN401
        """Call the predicate on the subject.

        Raises:
            UnsupportedPredicateError: If the subject has no such predicate.
            ShouldRuntimeError: If arguments are given to a non-callable predicate.
        """
        for name in self.candidates:
            try:
                attribute = getattr(subject, name)
            except AttributeError:
                continue

            if callable(attribute):
                return bool(attribute(*self.args, **self.kwargs))

            if self.args or self.kwargs:
                raise ShouldRuntimeError(f'Predicate {name!r} is not callable and takes no arguments')

            return bool(attribute)

        if universal := UNIVERSAL_PREDICATES.get(self.predicate):
            return bool(universal(subject, *self.args, **self.kwargs))

        raise UnsupportedPredicateError.from_subject(self.predicate, subject, self.candidates)

    def expected_repr(self) -> str:
        """Render the predicate call."""
        params = [
            *(f'{arg!r}' for arg in self.args),
            *(f'{key}={value!r}' for key, value in self.kwargs.items()),
        ]
        if params:
            return f'{self.predicate}({", ".join(params)})'

        return self.predicate


class RaisesMatcher(Matcher):
    """Matcher running a deferred action that must raise a given error kind.

    The check is delegated to the assertion engine, which records its own
    assertion and reports a missing or different error as a failure.
    """

    verb: ClassVar[str] = 'raise'

    expected: type[BaseException] | tuple[type[BaseException], ...] = Field(
        title='Expected error kind',
    )

    def matches(self, subject: Callable[[], Any]) -> bool:
        """Run the deferred action through the engine."""
        engine.assert_raises(self.expected, subject)

        return True

    def expected_repr(self) -> str:
        """Render the expected error kind."""
        if isinstance(self.expected, tuple):
            return ' or '.join(kind.__name__ for kind in self.expected)

        return self.expected.__name__


class ChangeMatcher(Matcher):
    """Matcher observing a value produced after a deferred action runs.

    Only the value after the action is compared with the baseline; the
    value before the action is never read.
    """

    verb: ClassVar[str] = 'change value from'

    producer: Callable[[], Any] = Field(
        title='Value producer',
        description='Zero-argument callable read after the action.',
    )
    baseline: Any = Field(
        default=None,
        title='Baseline value',
    )

    def from_(self, baseline: Any) -> Self:  # noqa: ANN401
        """Return a copy of the matcher comparing against `baseline`.

        The producer is not called.
        """
        return self.model_copy(update={'baseline': baseline})

    def matches(self, subject: Callable[[], Any]) -> bool:
        """Run the action, then compare the produced value with the baseline."""
        subject()

        return self.producer() == self.baseline

    def expected_repr(self) -> str:
        """Render the baseline."""
        return f'{self.baseline!r}'


def strict_equal(expected: Any, subject: Any) -> bool:  # noqa: ANN401
    """Compare two values without type coercion at any depth.

    Mapping keys and values, sequence items, and set members must have
    the same types on both sides, so `[1]` differs from `[1.0]` and
    `{'a': True}` differs from `{'a': 1}`.

    Args:
        expected: Reference value.
        subject: Value under test.

    Returns:
        True if both values have identical types and equal contents.
    """
    if type(subject) is not type(expected):
        return False

    if isinstance(expected, MAPPINGS):
        if len(expected) != len(subject):
            return False
        keys = {key: key for key in subject}
        return all(
            key in keys
            and strict_equal(key, keys[key])
            and strict_equal(value, subject[key])
            for key, value in expected.items()
        )

    if isinstance(expected, list | tuple):
        return len(expected) == len(subject) and all(
            strict_equal(left, right)
            for left, right in zip(expected, subject, strict=True)
        )

    if isinstance(expected, set | frozenset):
        members = {member: member for member in subject}
        return len(expected) == len(subject) and all(
            member in members and strict_equal(member, members[member])
            for member in expected
        )

    return expected == subject


class IdentityEqualMatcher(Matcher):
    """Matcher for strict equality without type coercion.

    `1` does not match `1.0` and `True` does not match `1`.
    """

    verb: ClassVar[str] = 'eql'

    expected: Any = Field(title='Expected value')

    def matches(self, subject: Any) -> bool:  # noqa: ANN401
        """Compare type and value, element by element for containers."""
        return strict_equal(self.expected, subject)

    def expected_repr(self) -> str:
        """Render the expected value."""
        return f'{self.expected!r}'


class LiteralMatcher(Matcher):
    """Matcher for the `True`, `False`, and `None` singletons."""

    verb: ClassVar[str] = 'be'

    expected: bool | None = Field(title='Expected singleton')

    def matches(self, subject: Any) -> bool:  # noqa: ANN401
        """Compare by identity."""
        return subject is self.expected

    def expected_repr(self) -> str:
        """Render the singleton."""
        return f'{self.expected!r}'


class PatternMatcher(Matcher):
    """Matcher searching a regular expression in a string subject."""

    verb: ClassVar[str] = 'include'

    pattern: Pattern[str] = Field(title='Regular expression')

    def matches(self, subject: Any) -> bool:  # noqa: ANN401
        """Search the pattern; non-string subjects never match."""
        if not isinstance(subject, str):
            return False

        return self.pattern.search(subject) is not None

    def expected_repr(self) -> str:
        """Render the pattern source."""
        return f'{self.pattern.pattern!r}'


class DefaultEqualMatcher(Matcher):
    """Implicit matcher returned by `should()` without arguments.

    Comparing it with `==` asserts equality through the engine;
    comparing it with `!=` asserts inequality.
    """

    verb: ClassVar[str] = 'equal'

    expected: Any = Field(title='Subject of the expectation')

    def matches(self, subject: Any) -> bool:  # noqa: ANN401
        """Assert equality through the engine."""
        return engine.assert_equal(self.expected, subject)

    def __eq__(self, other: object) -> bool:
        """Assert equality with `other`."""
        return self.matches(other)

    def __ne__(self, other: object) -> bool:
        """Assert inequality with `other`."""
        return engine.refute_equal(self.expected, other)

    __hash__ = None  # type: ignore[assignment]


class DefaultNotEqualMatcher(Matcher):
    """Implicit matcher returned by `should_not()` without arguments.

    Comparing it with `==` asserts inequality through the engine.
    """

    verb: ClassVar[str] = 'differ from'

    expected: Any = Field(title='Subject of the expectation')

    def matches(self, subject: Any) -> bool:  # noqa: ANN401
        """Assert inequality through the engine."""
        return engine.refute_equal(self.expected, subject)

    def __eq__(self, other: object) -> bool:
        """Assert inequality with `other`."""
        return self.matches(other)

    def __ne__(self, other: object) -> bool:
        """Assert equality with `other`."""
        return engine.assert_equal(self.expected, other)

    __hash__ = None  # type: ignore[assignment]
