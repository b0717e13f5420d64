"""Matcher constructors used by test bodies.

Every function here builds one matcher variant. Predicate matchers are
normally built with `predicate`; the `be_<name>` spelling is resolved
by the `pytest_should.matchers` package through `resolve_convention`.
"""

from re import compile as regexp
from typing import TYPE_CHECKING, Any

from pytest_should.errors import UnknownMatcherError

from .builtins import (
    ChangeMatcher,
    IdentityEqualMatcher,
    LiteralMatcher,
    PatternMatcher,
    PredicateMatcher,
    RaisesMatcher,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from re import Pattern

if TYPE_CHECKING:
    from pytest_should.values import DeferredAction, Producer

#: Naming convention for predicate matchers: `be_<name>`, `be_a_<name>`, `be_an_<name>`.
CONVENTION_PATTERN = regexp(r'^be_(?:an?_)?(?P<fragment>\w+)$')


def running(action: 'DeferredAction') -> 'DeferredAction':
    """Mark a zero-argument callable as a deferred action.

    Returns the callable unchanged; it only makes expectations about
    errors and changes read naturally. Usable as a decorator.
    """
    return action


def eql(value: Any) -> IdentityEqualMatcher:  # noqa: ANN401
    """Match values equal to `value` and of exactly the same type."""
    return IdentityEqualMatcher(expected=value)


def raise_error(kind: type[BaseException] | tuple[type[BaseException], ...]) -> RaisesMatcher:
    """Match deferred actions raising an error of the given kind."""
    return RaisesMatcher(expected=kind)


def change(producer: 'Producer') -> ChangeMatcher:
    """Match deferred actions after which `producer()` equals a baseline.

    The baseline is set with `from_`:

        expect(running(counter.reset)).should(change(lambda: counter.value).from_(0))
    """
    return ChangeMatcher(producer=producer)


def include(pattern: 'str | Pattern[str]') -> PatternMatcher:
    """Match strings containing the regular expression `pattern`."""
    return PatternMatcher(pattern=pattern)


def be_true() -> LiteralMatcher:
    """Match the `True` singleton."""
    return LiteralMatcher(expected=True)


def be_false() -> LiteralMatcher:
    """Match the `False` singleton."""
    return LiteralMatcher(expected=False)


def be_none() -> LiteralMatcher:
    """Match `None`."""
    return LiteralMatcher(expected=None)


be_nil = be_none


def predicate(fragment: str, *args: Any, **kwargs: Any) -> PredicateMatcher:  # noqa: ANN401
    """Build a predicate matcher.

    Args:
        fragment: Predicate name, for example `"empty"` for `is_empty`.
        *args: Positional arguments passed to the predicate.
        **kwargs: Keyword arguments passed to the predicate.

    Returns:
        PredicateMatcher for the lower-cased fragment.
    """
    return PredicateMatcher(predicate=fragment.lower(), args=args, kwargs=kwargs)


be_a = be_an = predicate


def resolve_convention(name: str) -> 'Callable[..., PredicateMatcher]':
    """Resolve a `be_<name>` identifier into a predicate matcher factory.

    Args:
        name: Identifier such as `be_empty` or `be_an_instance_of`.

    Returns:
        Factory taking the predicate arguments.

    Raises:
        UnknownMatcherError: If the identifier does not follow the convention.
    """
    found = CONVENTION_PATTERN.match(name)
    if not found:
        raise UnknownMatcherError(f'Unknown matcher {name!r}')

    fragment = found.group('fragment')

    def factory(*args: Any, **kwargs: Any) -> PredicateMatcher:  # noqa: ANN401
        return predicate(fragment, *args, **kwargs)

    factory.__name__ = name
    factory.__qualname__ = name
    factory.__doc__ = f'Match subjects for which {fragment!r} holds.'

    return factory
