"""Behavior specification DSL for pytest.

The `pytest_should` package lets test modules declare nested suites with
free-text descriptions, register before and after hooks inherited down
the nesting, and write assertions in a "subject should matcher" style.

Key features:
- `describe`/`context`/`it` suites collected as pytest items;
- hooks inherited by nested suites at declaration time;
- `expect(subject).should(matcher)` expectations backed by
  `unittest.TestCase` assertions;
- per-unit assertion counts reported alongside pytest results.

Every pass/fail decision is delegated to the assertion engine; the DSL
only composes matchers and the suite tree.
"""

from .expectations import Expectation, expect, should, should_not
from .matchers import (
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
    running,
)
from .suite import after, before, context, describe, it

__all__ = (
    'Expectation',
    'after',
    'be_a',
    'be_an',
    'be_false',
    'be_nil',
    'be_none',
    'be_true',
    'before',
    'change',
    'context',
    'describe',
    'eql',
    'expect',
    'include',
    'it',
    'predicate',
    'raise_error',
    'running',
    'should',
    'should_not',
)
