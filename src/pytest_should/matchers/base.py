"""Base matcher definition.

A matcher encapsulates one check strategy against a subject or against
a deferred action. Expectations hand matchers to the assertion engine,
which evaluates `matches` and records the outcome.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING, ClassVar

from pytest_should.models import SchemaModel

if TYPE_CHECKING:
    from pytest_should.values import Subject


class Matcher(SchemaModel):
    """Base class for all matcher variants.

    Matchers are immutable Pydantic models. A single matcher instance
    may be evaluated by several expectations.
    """

    #: Verb phrase used in failure messages ("Expected <subject> to ...").
    verb: ClassVar[str] = 'match'

    @abstractmethod
    def matches(self, subject: 'Subject') -> bool:
        """Check the subject.

        Args:
            subject: Value, or deferred action for matchers that
                control execution.

        Returns:
            True if the subject satisfies the matcher.
        """
        raise NotImplementedError  # pragma: no cover

    def describe(self) -> str:
        """Describe the expectation for failure messages."""
        return f'{self.verb} {self.expected_repr()}'

    def expected_repr(self) -> str:
        """Render the expected side of the matcher."""
        return ''
