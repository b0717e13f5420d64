"""Matchers and matcher constructors.

Besides the explicit constructors, this package resolves predicate
matchers from their names: `matchers.be_empty()` builds the same
matcher as `predicate('empty')`, and `be_an_instance_of(str)` the same
as `predicate('instance_of', str)`. Any other unknown attribute raises
`UnknownMatcherError`.
"""

from typing import TYPE_CHECKING

from .base import Matcher
from .builtins import (
    ChangeMatcher,
    DefaultEqualMatcher,
    DefaultNotEqualMatcher,
    IdentityEqualMatcher,
    LiteralMatcher,
    PatternMatcher,
    PredicateMatcher,
    RaisesMatcher,
)
from .factory import (
    be_a,
    be_an,
    be_false,
    be_nil,
    be_none,
    be_true,
    change,
    eql,
    include,
    predicate,
    raise_error,
    resolve_convention,
    running,
)

if TYPE_CHECKING:
    from collections.abc import Callable


def __getattr__(name: str) -> 'Callable[..., PredicateMatcher]':
    """Resolve `be_<name>` predicate matcher factories."""
    if name.startswith('__'):
        raise AttributeError(name)

    return resolve_convention(name)


__all__ = (
    'ChangeMatcher',
    'DefaultEqualMatcher',
    'DefaultNotEqualMatcher',
    'IdentityEqualMatcher',
    'LiteralMatcher',
    'Matcher',
    'PatternMatcher',
    'PredicateMatcher',
    'RaisesMatcher',
    'be_a',
    'be_an',
    'be_false',
    'be_nil',
    'be_none',
    'be_true',
    'change',
    'eql',
    'include',
    'predicate',
    'raise_error',
    'running',
)
