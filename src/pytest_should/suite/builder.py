"""Suite tree construction.

`describe` and `context` create a suite under the suite currently being
declared (or a root suite at module level), make it current while the
body runs, and restore the previous one afterwards. `it`, `before`, and
`after` attach units and hooks to the current suite.

All functions accept the body directly or, without it, return a
decorator:

    @describe('User Account')
    def user_account():

        @before
        def create(world):
            world.account = Account(active=True)

        @it('is valid when active')
        def _(world):
            expect(world.account).should(be_valid())

Decorated root suites are bound to the module under the decorated
function's name, which is how pytest finds them.
"""

from functools import partial
from typing import TYPE_CHECKING, TypeAlias, overload

from pytest_should.config import ShouldSettings
from pytest_should.errors import SuiteDefinitionError

from .nodes import SuiteNode, TestUnit, register

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

if TYPE_CHECKING:
    from pytest_should.values import Hook

#: Suite body: a callable taking no arguments.
Body: TypeAlias = 'Callable[[], object]'


class SuiteBuilder:
    """Stateful builder keeping track of the suite being declared.

    Declarations are expected to run sequentially, as module imports do.
    """

    def __init__(self, settings: ShouldSettings | None = None) -> None:
        """Initialize the builder.

        Args:
            settings: Active settings; read from the environment when omitted.
        """
        self.settings = settings or ShouldSettings()
        self.roots: dict[str, SuiteNode] = {}

        self._stack: list[SuiteNode] = []

    @property
    def current(self) -> SuiteNode | None:
        """Return the suite being declared, if any."""
        if not self._stack:
            return None

        return self._stack[-1]

    def require_current(self, declaration: str) -> SuiteNode:
        """Return the suite being declared.

        Raises:
            SuiteDefinitionError: If called outside of any suite.
        """
        if (node := self.current) is None:
            raise SuiteDefinitionError(f'{declaration!r} must be declared inside a suite')

        return node

    @overload
    def describe(self, description: str) -> 'Callable[[Body], SuiteNode]':
        ...  # pragma: no cover

    @overload
    def describe(self, description: str, body: 'Body') -> SuiteNode:
        ...  # pragma: no cover

    def describe(self, description: str,
                 body: 'Body | None' = None) -> 'SuiteNode | Callable[[Body], SuiteNode]':
        """Declare a suite and evaluate its body.

        Args:
            description: Free-text suite description.
            body: Callable declaring hooks, units, and nested suites.

        Returns:
            The new suite, or a decorator when `body` is omitted.

        Raises:
            SuiteDefinitionError: On a name collision in strict mode.
        """
        if body is None:
            return partial(self.describe, description)

        parent = self.current
        node = SuiteNode(description, parent, module=getattr(body, '__module__', None))

        if parent is None:
            register(
                self.roots,
                f'{node.module}.{node.name}',
                node,
                kind='suite',
                strict=self.settings.strict,
            )
        else:
            parent.add_child(node, strict=self.settings.strict)

        self._stack.append(node)
        try:
            body()
        finally:
            self._stack.pop()

        return node

    context = describe

    @overload
    def it(self, description: str) -> 'Callable[[Hook], TestUnit]':
        ...  # pragma: no cover

    @overload
    def it(self, description: str, body: 'Hook') -> TestUnit:
        ...  # pragma: no cover

    def it(self, description: str,
           body: 'Hook | None' = None) -> 'TestUnit | Callable[[Hook], TestUnit]':
        """Declare a test unit in the current suite.

        Args:
            description: Free-text unit description.
            body: Callable taking no arguments or the unit state.

        Returns:
            The new unit, or a decorator when `body` is omitted.

        Raises:
            SuiteDefinitionError: Outside of a suite, or on a name
                collision in strict mode.
        """
        if body is None:
            return partial(self.it, description)

        suite = self.require_current('it')

        return suite.add_unit(TestUnit(description, body, suite), strict=self.settings.strict)

    def before(self, hook: 'Hook') -> 'Hook':
        """Register a hook run before each unit of the current suite and its descendants.

        Raises:
            SuiteDefinitionError: Outside of a suite.
        """
        return self.require_current('before').hooks.add('before', hook)

    def after(self, hook: 'Hook') -> 'Hook':
        """Register a hook run after each unit of the current suite.

        Raises:
            SuiteDefinitionError: Outside of a suite.
        """
        return self.require_current('after').hooks.add('after', hook)

    def walk(self) -> 'Iterator[TestUnit]':
        """Iterate over the units of all root suites."""
        for root in self.roots.values():
            yield from root.walk()


#: Builder used by the module-level declaration functions.
_builder = SuiteBuilder()


def get_builder() -> SuiteBuilder:
    """Return the builder used by the module-level declaration functions."""
    return _builder


def activate(new: SuiteBuilder) -> SuiteBuilder:
    """Make `new` the builder used by the module-level declaration functions.

    Args:
        new: Builder to activate.

    Returns:
        The previously active builder, so it can be restored.
    """
    global _builder  # noqa: PLW0603

    previous, _builder = _builder, new

    return previous


def describe(description: str, body: 'Body | None' = None) -> 'SuiteNode | Callable[[Body], SuiteNode]':
    """Declare a suite. See `SuiteBuilder.describe`."""
    return _builder.describe(description, body)


def context(description: str, body: 'Body | None' = None) -> 'SuiteNode | Callable[[Body], SuiteNode]':
    """Declare a nested suite. Same as `describe`."""
    return _builder.describe(description, body)


def it(description: str, body: 'Hook | None' = None) -> 'TestUnit | Callable[[Hook], TestUnit]':
    """Declare a test unit. See `SuiteBuilder.it`."""
    return _builder.it(description, body)


def before(hook: 'Hook') -> 'Hook':
    """Register a before hook. See `SuiteBuilder.before`."""
    return _builder.before(hook)


def after(hook: 'Hook') -> 'Hook':
    """Register an after hook. See `SuiteBuilder.after`."""
    return _builder.after(hook)
