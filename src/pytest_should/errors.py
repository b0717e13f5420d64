"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report suite declaration issues, unknown matcher lookups, and runtime
failures of matchers, in a structured and extensible way.

Assertion failures are never represented here: they are raised by the
assertion engine as plain `AssertionError` and reach pytest untouched.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump

from pytest_should.values import MAPPINGS, SCALARS, SEQUENCES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Self

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_SUITE = '<top level>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Names of the suites enclosing the failing element, root first.
    suite_path: 'Sequence[str] | None'
    #: Name of the test unit being executed.
    unit_name: str | None

    #: Stage of the unit lifecycle ("before", "body", "after").
    stage: str | None
    #: Number of the hook within its stage.
    hook_num: int | None

    #: Subject of the failing expectation.
    subject: Any


class ErrorFormatter:
    """Utility class for formatting DSL-related errors.

    This formatter is responsible for producing human-readable
    error messages with optional location and YAML-based
    contextual snippets.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format suite and lifecycle location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including the suite path,
            unit name, and hook number when available.
        """
        indent = cls._ensure_indent(indent)

        suite_path = context.get('suite_path')
        suite = '::'.join(suite_path) if suite_path else FORMAT_SUITE

        message = f'{indent}in "{suite}"'
        if unit_name := context.get('unit_name'):
            message += f', unit "{unit_name}"'
        message += linesep

        if stage := context.get('stage'):
            message += f'{indent}on {stage}'
            if (hook_num := context.get('hook_num')) is not None:
                hook_num += 1
                message += f' hook {hook_num}'
            message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet showing the failing subject.

        Args:
            context: Error context containing the subject.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no subject is available.
        """
        indent = cls._ensure_indent(indent)

        if 'subject' not in context:
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml({'subject': context['subject']}, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Non-scalar and non-container objects are replaced with their
        `repr` so that opaque objects still read well in messages.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                f'{key}': cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        try:
            return repr(value)
        except Exception:  # noqa: BLE001
            return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to a YAML-formatted string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class ShouldWarning(UserWarning):
    """Base warning for non-fatal DSL issues."""


class ShadowingWarning(ShouldWarning):
    """Warning emitted when a suite or unit replaces a sibling with the same name.

    In strict mode the same situation raises `SuiteDefinitionError`.
    """


class ShouldError(Exception, ErrorFormatter):
    """Base exception for all pytest-should errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional runtime values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)

    def with_context(self, **context: Any) -> 'Self':  # noqa: ANN401
        """Create a copy of the error enriched with location context.

        Values already present in the error context take precedence,
        so the innermost location is preserved.

        Args:
            **context: `ErrorContext` fields to add.

        Returns:
            A new error instance of the same type.
        """
        error_context = ErrorContext(**{**context, **(self.context or {})})  # type: ignore[typeddict-item]

        return type(self)(self.message, context=error_context)


class SuiteDefinitionError(ShouldError):
    """Error raised while building the suite tree.

    This exception indicates a declaration made outside of any suite,
    or a name collision among siblings in strict mode.
    """


class ShouldRuntimeError(ShouldError):
    """Error raised while evaluating a matcher.

    Distinct from an assertion failure: it signals that the expectation
    could not be evaluated at all.
    """


class UnsupportedPredicateError(ShouldRuntimeError):
    """Error raised when a predicate matcher names a predicate the subject lacks."""

    @classmethod
    def from_subject(cls, predicate: str, subject: Any,  # noqa: ANN401
                     candidates: 'Sequence[str]') -> 'Self':
        """Create an error describing the missing predicate.

        Args:
            predicate: Predicate fragment requested by the matcher.
            subject: Object the predicate was looked up on.
            candidates: Attribute names that were tried.

        Returns:
            UnsupportedPredicateError with the subject in its context.
        """
        tried = ', '.join(repr(name) for name in candidates)
        message = (
            f'{type(subject).__name__!r} object does not support predicate '
            f'{predicate!r} (tried {tried})'
        )

        return cls(message, context=ErrorContext(subject=subject))


class UnknownMatcherError(ShouldError, AttributeError):
    """Error raised for a DSL call that does not name any matcher.

    It also derives from `AttributeError` so that attribute lookups on
    the matchers namespace keep their usual semantics.
    """
