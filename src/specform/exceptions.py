"""Exception hierarchy for specform.

All exceptions inherit from :class:`SpecformError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specform.exit_codes`.
The top-level error handler in :func:`specform.app.main` catches
``SpecformError`` and exits with the appropriate code.

Errors raised while loading the description or selecting the operation end
the session. Errors raised while committing a form (:class:`FieldError`
and :class:`CommitRejected`) are recoverable: the interactive form reports
them next to the offending fields and asks again.

Subclass hierarchy::

    SpecformError (exit 1)
    +-- InvalidUsageError            (exit 2)
    +-- ConfigError                  (exit 1)
    +-- LoadError                    (exit 7)
    +-- UnsupportedContentTypeError  (exit 8)
    +-- JSONReflowError              (exit 9)
    +-- FieldError                   (exit 9)
    |   +-- CoercionError
    |   +-- CompoundParseError
    +-- CommitRejected               (exit 9)
    +-- ExecutionError               (exit 11)
"""

from __future__ import annotations

from specform.exit_codes import (
    EXIT_EXECUTION_ERROR,
    EXIT_FIELD_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
    EXIT_UNSUPPORTED_CONTENT,
)


class SpecformError(Exception):
    """Base exception for all specform errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specform.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecformError):
    """Raised for invalid CLI arguments or an operation selector that matches nothing."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(SpecformError):
    """Raised when an environment variable or flag holds an unusable value."""

    exit_code = EXIT_GENERIC_FAILURE


class LoadError(SpecformError):
    """Raised when the API description cannot be obtained, parsed, or validated."""

    exit_code = EXIT_LOAD_ERROR


class UnsupportedContentTypeError(SpecformError):
    """Raised when an operation's request body offers no JSON representation."""

    exit_code = EXIT_UNSUPPORTED_CONTENT


class JSONReflowError(SpecformError):
    """Raised when a JSON fragment cannot be parsed.

    Args:
        message: The decoder's description of the problem.
        line: 1-based line of the failure, when known.
        column: 1-based column of the failure, when known.
    """

    exit_code = EXIT_FIELD_ERROR

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class FieldError(SpecformError):
    """Base class for problems tied to a single form field.

    Args:
        field: Name of the property whose text was rejected.
        message: Description of the problem, without the field name.
    """

    exit_code = EXIT_FIELD_ERROR

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.reason = message


class CoercionError(FieldError):
    """Raised when a primitive field's text does not parse as its declared type."""


class CompoundParseError(FieldError):
    """Raised when a compound field's text is not well-formed JSON."""


class CommitRejected(SpecformError):
    """Raised when a form commit fails; carries every per-field message.

    Args:
        errors: Mapping of field name to the reason it was rejected, in
            field order.
    """

    exit_code = EXIT_FIELD_ERROR

    def __init__(self, errors: dict[str, str]):
        summary = "; ".join(f"{name}: {reason}" for name, reason in errors.items())
        super().__init__(f"Form rejected ({summary})")
        self.errors = errors


class ExecutionError(SpecformError):
    """Raised when the rendered command fails to start or exits non-zero.

    The CLI reports this as a warning, since the command text has already
    been printed by the time execution is attempted.
    """

    exit_code = EXIT_EXECUTION_ERROR
