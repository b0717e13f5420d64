"""Base Pydantic models for DSL elements.

This module defines the foundational model classes used by matchers and
runtime settings. Matchers are immutable once built, so that a matcher
instance can be safely reused by several expectations.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all DSL elements.

    Design principles enforced by this model:
        - Immutability: DSL elements cannot be modified after creation.
          Refinements (for example, `change(...).from_(...)`) return
          a modified copy instead.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos.
        - Arbitrary types: subjects and expected values may be any
          Python object, so they are stored as-is.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
          This guarantees consistent behavior during a test session.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
