"""Pytest item executing a single test unit.

The item runs the unit lifecycle, folds the number of assertions the
unit made into its own count and its user properties, and re-raises the
unit's failure for pytest to report.
"""

from typing import TYPE_CHECKING

import pytest

from pytest_should.errors import ShouldError

if TYPE_CHECKING:
    from typing import Any

if TYPE_CHECKING:
    from _pytest._code.code import ExceptionInfo, TerminalRepr

if TYPE_CHECKING:
    from pytest_should.suite import TestUnit

#: User property holding the number of assertions made by a unit.
ASSERTIONS_PROPERTY = 'assertions'


class UnitItem(pytest.Item):
    """Pytest item executing a single DSL test unit."""

    __test__ = False

    def __init__(self, *, unit: 'TestUnit', **kwargs: 'Any') -> None:
        """Initialize a pytest item backed by a test unit.

        Args:
            unit: Test unit to execute.
            **kwargs: Keyword pytest.Item arguments.
        """
        super().__init__(**kwargs)

        self.unit = unit
        self.assertions = 0

    def runtest(self) -> None:
        """Execute the test unit."""
        result = self.unit.execute(self.config.should_builder.settings)  # type: ignore[attr-defined]

        self.assertions += result.assertions
        self.user_properties.append((ASSERTIONS_PROPERTY, self.assertions))

        result.raise_for_outcome()

    def repr_failure(self, excinfo: 'ExceptionInfo[BaseException]',
                     style: 'Any' = None) -> 'str | TerminalRepr':
        """Represent DSL errors by their formatted message."""
        if isinstance(excinfo.value, ShouldError):
            return f'{excinfo.value}'

        return super().repr_failure(excinfo, style=style)

    def reportinfo(self) -> tuple['Any', int | None, str]:
        """Return location information for reporting."""
        return self.path, None, '::'.join(self.unit.path)
