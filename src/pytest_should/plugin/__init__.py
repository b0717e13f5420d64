"""Pytest plugin collecting and executing DSL suites.

This module integrates the `pytest-should` DSL with pytest by:
- registering custom command-line options;
- configuring a `SuiteBuilder` for the session's declarations;
- collecting module-level root suites as pytest collectors;
- reporting the number of assertions made by test units.
"""

from typing import TYPE_CHECKING

from pytest_should.config import ShouldSettings
from pytest_should.suite import SuiteBuilder, SuiteNode, activate

from .suite import SuiteCollector
from .unit import ASSERTIONS_PROPERTY

if TYPE_CHECKING:
    from typing import Any

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.python import PyCollector
    from _pytest.terminal import TerminalReporter


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-should.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('should', 'behavior specification suites')
    group.addoption(
        '--should-strict',
        action='store_true',
        dest='should_strict',
        default=False,
        help=(
            'Fail when a suite or a test unit replaces a sibling declared '
            'under the same name, instead of emitting a warning.'
        ),
    )
    group.addoption(
        '--should-after-hooks',
        action='store',
        dest='should_after_hooks',
        choices=('own', 'parent'),
        default=None,
        help=(
            'Which after hooks run when a test unit completes: those of its '
            'own suite, innermost first ("own", default), or those of the '
            'parent suite ("parent", legacy behavior).'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Configure pytest-should integration.

    Settings are read from `PYTEST_SHOULD_*` environment variables and
    overridden by command-line options. A fresh `SuiteBuilder` is attached
    to the configuration object as `config.should_builder` and activated
    for the declarations made by test modules.

    Args:
        config: Pytest configuration object.
    """
    overrides: dict[str, Any] = {}
    if config.getoption('should_strict', default=False):
        overrides['strict'] = True
    if mode := config.getoption('should_after_hooks', default=None):
        overrides['after_hooks'] = mode

    builder = SuiteBuilder(ShouldSettings(**overrides))

    config.should_builder = builder  # type: ignore[attr-defined]
    config.should_previous_builder = activate(builder)  # type: ignore[attr-defined]


def pytest_unconfigure(config: 'Config') -> None:
    """Restore the builder that was active before the session."""
    if previous := getattr(config, 'should_previous_builder', None):
        activate(previous)


def pytest_pycollect_makeitem(collector: 'PyCollector', name: str,  # noqa: ARG001
                              obj: object) -> SuiteCollector | None:
    """Collect root suites bound to module attributes.

    Args:
        collector: Module or class collector being populated.
        name: Attribute name.
        obj: Attribute value.

    Returns:
        A `SuiteCollector` for root suites, otherwise ``None``.
    """
    if isinstance(obj, SuiteNode) and obj.parent is None:
        return SuiteCollector.from_parent(
            collector,
            name=obj.name,
            node=obj,
        )

    return None


def pytest_terminal_summary(terminalreporter: 'TerminalReporter') -> None:
    """Report the total number of assertions made by test units.

    Args:
        terminalreporter: Pytest terminal reporter.
    """
    units = assertions = 0
    for reports in terminalreporter.stats.values():
        for report in reports:
            if getattr(report, 'when', None) != 'call':
                continue
            for key, value in getattr(report, 'user_properties', ()):
                if key == ASSERTIONS_PROPERTY:
                    units += 1
                    assertions += value

    if units:
        terminalreporter.write_line(f'{units} test units, {assertions} assertions')
