"""Core type definitions for the DSL runtime.

This module names the callable shapes passed around by the DSL: deferred
actions consumed by matchers, hooks and unit bodies run by the suite
lifecycle, and value producers observed by change matchers.
"""

from collections.abc import Callable
from datetime import date, datetime, timedelta
from inspect import Parameter, signature
from typing import Any, TypeAlias

#: Any object an expectation can be made about.
Subject: TypeAlias = Any

#: A zero-argument unit of delayed execution. Matchers such as
#: `raise_error` and `change` control exactly when it runs.
DeferredAction: TypeAlias = Callable[[], Any]

#: A zero-argument callable observed after a deferred action.
Producer: TypeAlias = Callable[[], Any]

#: Hooks and unit bodies either take no arguments or receive the
#: per-unit state object as their single positional argument.
Hook: TypeAlias = Callable[..., Any]

MAPPINGS = (dict,)
SCALARS = (date, datetime, timedelta, str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set, frozenset)

_POSITIONAL = (
    Parameter.POSITIONAL_ONLY,
    Parameter.POSITIONAL_OR_KEYWORD,
    Parameter.VAR_POSITIONAL,
)


def accepts_argument(func: Hook) -> bool:
    """Tell whether a hook or body expects the per-unit state object.

    Args:
        func: Hook or unit body.

    Returns:
        True if the callable declares at least one positional parameter
        without a default value. Parameters with defaults keep them, so
        `lambda i=i: ...` still sees the bound `i`.
    """
    try:
        parameters = signature(func).parameters.values()
    except (TypeError, ValueError):
        return False

    return any(
        param.kind in _POSITIONAL and param.default is Parameter.empty
        for param in parameters
    )
