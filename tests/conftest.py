"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from pytest_should.config import ShouldSettings
from pytest_should.suite import SuiteBuilder

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def settings() -> ShouldSettings:
    """Provide default settings independent from the environment."""
    return ShouldSettings(strict=False, after_hooks='own')


@pytest.fixture
def builder(settings: ShouldSettings) -> SuiteBuilder:
    """Provide an isolated suite builder.

    Declarations made through this builder never reach the builder
    used by the module-level `describe`, so suites built in tests are
    not collected by the running pytest session.
    """
    return SuiteBuilder(settings)


@pytest.fixture
def make_builder() -> 'Callable[..., SuiteBuilder]':
    """Provide a factory for builders with custom settings."""
    def make(**options: object) -> SuiteBuilder:
        """Build an isolated builder.

        Args:
            **options: `ShouldSettings` fields.

        Returns:
            A new `SuiteBuilder`.
        """
        return SuiteBuilder(ShouldSettings(**options))

    return make
