"""Before and after hooks attached to suites.

Each suite owns one registry. A child suite starts from a copy of its
parent's registry taken when the child is declared, then appends its own
hooks. Hooks registered on the parent afterwards never reach the child.
"""

from typing import TYPE_CHECKING, TypeAlias

from pytest_should.values import accepts_argument

if TYPE_CHECKING:
    from typing import Any, Literal, Self

if TYPE_CHECKING:
    from pytest_should.values import Hook

#: Lifecycle stage a hook belongs to.
Stage: TypeAlias = "Literal['before', 'after']"


class HookRegistry:
    """Ordered before and after hook lists of one suite."""

    __slots__ = ('after', 'before')

    def __init__(self, before: 'list[Hook] | None' = None,
                 after: 'list[Hook] | None' = None) -> None:
        """Initialize the registry.

        Args:
            before: Hooks run before each unit, in order.
            after: Hooks run after each unit.
        """
        self.before: list[Hook] = list(before or ())
        self.after: list[Hook] = list(after or ())

    def __repr__(self) -> str:
        """String represenatation."""
        return f'{type(self).__name__}(before={len(self.before)}, after={len(self.after)})'

    def inherit(self) -> 'Self':
        """Return an independent copy for a child suite."""
        return type(self)(self.before, self.after)

    def add(self, stage: 'Stage', hook: 'Hook') -> 'Hook':
        """Append a hook to a stage.

        Args:
            stage: Either `"before"` or `"after"`.
            hook: Callable taking no arguments or the unit state.

        Returns:
            The hook itself, so the method can back decorators.
        """
        getattr(self, stage).append(hook)

        return hook


def call_hook(hook: 'Hook', world: 'Any') -> 'Any':  # noqa: ANN401
    """Call a hook or unit body, passing the unit state when it accepts one.

    Args:
        hook: Hook or body to call.
        world: Per-unit state object.

    Returns:
        Whatever the callable returns.
    """
    if accepts_argument(hook):
        return hook(world)

    return hook()
