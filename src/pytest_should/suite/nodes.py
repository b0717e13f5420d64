"""Suite tree nodes and test units.

A `SuiteNode` groups test units and nested suites and owns a hook
registry inherited from its parent. A `TestUnit` is one named body
scoped to exactly one suite; running it executes the before hooks, the
body, and the after hooks, and measures the assertions they made.
"""

from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, Literal, TypeAlias, TypeVar
from warnings import warn

from pydantic import Field

from pytest_should.engine import tally
from pytest_should.errors import ShadowingWarning, ShouldRuntimeError, SuiteDefinitionError
from pytest_should.models import SchemaModel
from pytest_should.names import classify, methodize

from .hooks import HookRegistry, call_hook

if TYPE_CHECKING:
    from collections.abc import Iterator, MutableMapping

if TYPE_CHECKING:
    from pytest_should.config import AfterHooksMode, ShouldSettings
    from pytest_should.values import Hook

#: Outcome of a unit execution.
Outcome: TypeAlias = Literal['passed', 'failed', 'error']

T = TypeVar('T')


def register(container: 'MutableMapping[str, T]', name: str, item: T, *,
                kind: str, strict: bool = False) -> T:
    """Add a named item to a container, resolving name collisions.

    The last registration wins and keeps the position of the first one.

    Args:
        container: Mapping of names to suites or units.
        name: Item name.
        item: Suite or unit to register.
        kind: Item kind used in messages.
        strict: Whether a collision is an error.

    Returns:
        The registered item.

    Raises:
        SuiteDefinitionError: On a collision in strict mode.
    """
    if name in container:
        message = f'{kind.capitalize()} {name!r} is shadowing an existing'
        if strict:
            raise SuiteDefinitionError(message)
        warn(message, category=ShadowingWarning, stacklevel=4)

    container[name] = item

    return item


class World(SimpleNamespace):
    """Per-unit state shared by the hooks and the body of one unit.

    A fresh instance is created for every unit execution.
    """


class UnitResult(SchemaModel):
    """Measured outcome of one test unit execution."""

    name: str = Field(title='Unit name')
    path: tuple[str, ...] = Field(title='Names of the enclosing suites')
    outcome: Outcome = Field(title='Outcome')
    assertions: int = Field(default=0, title='Assertions made')
    error: BaseException | None = Field(default=None, title='Raised error')

    @property
    def passed(self) -> bool:
        """Tell whether the unit passed."""
        return self.outcome == 'passed'

    def raise_for_outcome(self) -> None:
        """Re-raise the error of a failed or errored unit.

        Raises:
            BaseException: The error stored in the result, if any.
        """
        if self.error is not None:
            raise self.error


class SuiteNode:
    """Named container of test units and nested suites."""

    __test__ = False

    def __init__(self, description: str, parent: 'SuiteNode | None' = None, *,
                 module: str | None = None) -> None:
        """Initialize a suite.

        The hook registry is copied from the parent at this moment.

        Args:
            description: Free-text description the name is built from.
            parent: Enclosing suite, or None for a root suite.
            module: Name of the module declaring the suite.
        """
        self.description = description
        self.name = classify(description)
        self.parent = parent
        self.module = module if module is not None else getattr(parent, 'module', None)

        self.children: dict[str, SuiteNode] = {}
        self.units: dict[str, TestUnit] = {}

        self.hooks = parent.hooks.inherit() if parent else HookRegistry()

    def __repr__(self) -> str:
        """String represenatation."""
        return f'<{type(self).__name__} {"::".join(self.path)}>'

    @property
    def path(self) -> tuple[str, ...]:
        """Names of the suites from the root down to this one."""
        names = [node.name for node in self.ancestors()]

        return (*reversed(names), self.name)

    def ancestors(self) -> 'Iterator[SuiteNode]':
        """Iterate over enclosing suites, nearest first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def add_child(self, node: 'SuiteNode', *, strict: bool = False) -> 'SuiteNode':
        """Register a nested suite.

        Raises:
            SuiteDefinitionError: On a name collision in strict mode.
        """
        return register(self.children, node.name, node, kind='suite', strict=strict)

    def add_unit(self, unit: 'TestUnit', *, strict: bool = False) -> 'TestUnit':
        """Register a test unit.

        Raises:
            SuiteDefinitionError: On a name collision in strict mode.
        """
        return register(self.units, unit.name, unit, kind='unit', strict=strict)

    def walk(self) -> 'Iterator[TestUnit]':
        """Iterate over the units of this suite and of all nested suites.

        Units of a suite come before the units of its children.
        """
        yield from self.units.values()
        for child in self.children.values():
            yield from child.walk()


class TestUnit:
    """Named executable body scoped to one suite."""

    __test__ = False

    def __init__(self, description: str, body: 'Hook', suite: SuiteNode) -> None:
        """Initialize a unit.

        Args:
            description: Free-text description the name is built from.
            body: Callable taking no arguments or the unit state.
            suite: Enclosing suite.
        """
        self.description = description
        self.name = methodize(description)
        self.body = body
        self.suite = suite

    def __repr__(self) -> str:
        """String represenatation."""
        return f'<{type(self).__name__} {"::".join(self.path)}>'

    @property
    def path(self) -> tuple[str, ...]:
        """Names of the enclosing suites followed by the unit name."""
        return (*self.suite.path, self.name)

    def before_hooks(self) -> list['Hook']:
        """Return the before hooks to run, root suite hooks first."""
        return list(self.suite.hooks.before)

    def after_hooks(self, mode: 'AfterHooksMode' = 'own') -> list['Hook']:
        """Return the after hooks to run.

        Args:
            mode: `"own"` runs this suite's after hooks innermost first.
                `"parent"` runs the parent suite's after hooks in
                registration order, and none for units of a root suite.

        Returns:
            Hooks in execution order.
        """
        if mode == 'parent':
            if self.suite.parent is None:
                return []
            return list(self.suite.parent.hooks.after)

        return list(reversed(self.suite.hooks.after))

    def call(self, func: 'Hook', world: World, *,
             stage: str, hook_num: int | None = None) -> Any:  # noqa: ANN401
        """Call a hook or the body with DSL error context.

        Raises:
            AssertionError: Propagated as-is.
            ShouldRuntimeError: Re-raised with the unit location.
        """
        try:
            return call_hook(func, world)

        except ShouldRuntimeError as base:
            raise base.with_context(
                suite_path=self.suite.path,
                unit_name=self.name,
                stage=stage,
                hook_num=hook_num,
            ) from base

    def run(self, settings: 'ShouldSettings', world: World | None = None) -> None:
        """Run before hooks, the body, and after hooks.

        After hooks run even when a before hook or the body fails.

        Args:
            settings: Active settings.
            world: Unit state; a fresh one is created when omitted.

        Raises:
            AssertionError: If an expectation fails.
            Exception: Any error raised by hooks or the body.
        """
        if world is None:
            world = World()

        try:
            for hook_num, hook in enumerate(self.before_hooks()):
                self.call(hook, world, stage='before', hook_num=hook_num)

            self.call(self.body, world, stage='body')

        finally:
            for hook_num, hook in enumerate(self.after_hooks(settings.after_hooks)):
                self.call(hook, world, stage='after', hook_num=hook_num)

    def execute(self, settings: 'ShouldSettings', world: World | None = None) -> UnitResult:
        """Run the unit and measure its outcome and assertion count.

        Args:
            settings: Active settings.
            world: Unit state; a fresh one is created when omitted.

        Returns:
            Result with the outcome, the number of assertions made by
            hooks and body, and the error raised, if any.
        """
        outcome: Outcome = 'passed'
        error: BaseException | None = None

        with tally.session() as session:
            try:
                self.run(settings, world)
            except AssertionError as failure:
                outcome, error = 'failed', failure
            except Exception as base:  # noqa: BLE001
                outcome, error = 'error', base

        return UnitResult(
            name=self.name,
            path=self.suite.path,
            outcome=outcome,
            assertions=session.count,
            error=error,
        )
