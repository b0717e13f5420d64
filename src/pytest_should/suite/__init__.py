"""Suite tree, hooks, and test unit lifecycle.

The primary public entry points are the declaration functions
`describe`, `context`, `it`, `before`, and `after`, which build a tree
of `SuiteNode` objects collected by the pytest plugin.
"""

from .builder import (
    SuiteBuilder,
    activate,
    after,
    before,
    context,
    describe,
    get_builder,
    it,
)
from .hooks import HookRegistry
from .nodes import SuiteNode, TestUnit, UnitResult, World

__all__ = (
    'HookRegistry',
    'SuiteBuilder',
    'SuiteNode',
    'TestUnit',
    'UnitResult',
    'World',
    'activate',
    'after',
    'before',
    'context',
    'describe',
    'get_builder',
    'it',
)
