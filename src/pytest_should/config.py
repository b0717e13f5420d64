"""Runtime settings.

Settings are read from `PYTEST_SHOULD_*` environment variables and may
be overridden by pytest command-line options (see `pytest_should.plugin`).
"""

from typing import Literal, TypeAlias

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pytest_should.models import SettingsModel

#: Which after-hook list runs when a test unit completes.
AfterHooksMode: TypeAlias = Literal['own', 'parent']


class ShouldSettings(SettingsModel):
    """Settings controlling suite declaration and the unit lifecycle."""

    model_config = SettingsConfigDict(
        env_prefix='PYTEST_SHOULD_',
        frozen=True,
        extra='ignore',
    )

    strict: bool = Field(
        default=False,
        title='Strict declarations',
        description=(
            'Raise an error instead of a warning when a suite or a unit '
            'replaces a sibling declared under the same name.'
        ),
    )

    after_hooks: AfterHooksMode = Field(
        default='own',
        title='After-hook resolution',
        description=(
            'With "own", a unit runs the after hooks of its own suite, '
            'innermost first. With "parent", it runs the after hooks of the '
            'parent suite in registration order (legacy behavior); units '
            'of a root suite then run no after hooks.'
        ),
    )
