"""Pytest collector for DSL suites.

Each `SuiteNode` becomes a collector whose children are one `UnitItem`
per test unit followed by one nested collector per child suite.
"""

from typing import TYPE_CHECKING

import pytest

from .unit import UnitItem

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

if TYPE_CHECKING:
    from pytest_should.suite import SuiteNode


class SuiteCollector(pytest.Collector):
    """Pytest collector for one suite of the tree."""

    __test__ = False

    def __init__(self, *, node: 'SuiteNode', **kwargs: 'Any') -> None:
        """Initialize a collector backed by a suite.

        Args:
            node: Suite to collect.
            **kwargs: Keyword pytest.Collector arguments.
        """
        super().__init__(**kwargs)

        self.node = node

    def collect(self) -> 'Iterable[UnitItem | SuiteCollector]':
        """Collect the units and nested suites of the suite.

        Returns:
            Iterable of items and collectors, units first.
        """
        for unit in self.node.units.values():
            yield UnitItem.from_parent(
                self,
                name=unit.name,
                unit=unit,
            )

        for child in self.node.children.values():
            yield SuiteCollector.from_parent(
                self,
                name=child.name,
                node=child,
            )

    def reportinfo(self) -> tuple['Any', int | None, str]:
        """Return location information for reporting."""
        return self.path, None, '::'.join(self.node.path)
