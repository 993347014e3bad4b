"""Exception hierarchy for specview.

All exceptions inherit from :class:`SpecviewError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specview.exit_codes`.
The CLI entry point in :func:`specview.app.main` catches ``SpecviewError``
and exits with the matching code.

The view layer itself is tolerant: missing optional fields, unknown
security schemes, dangling ``$ref`` pointers and bogus response keys all
degrade to empty values. Only a structurally broken fragment raises.

Subclass hierarchy::

    SpecviewError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- NotFoundError          (exit 4)
    +-- SpecParseError         (exit 7)
    +-- InvalidOperationError  (exit 8)
    +-- ConfigError            (exit 1)
"""

from specview.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_OPERATION,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecviewError(Exception):
    """Base exception for all specview errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecviewError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(SpecviewError):
    """Raised when a requested operation is not present in the document."""

    exit_code = EXIT_NOT_FOUND


class SpecParseError(SpecviewError):
    """Raised when the OpenAPI document cannot be loaded or parsed."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class InvalidOperationError(SpecviewError):
    """Raised when an operation fragment lacks its HTTP verb or path."""

    exit_code = EXIT_INVALID_OPERATION


class ConfigError(SpecviewError):
    """Raised for configuration problems (invalid JSON, bad option values)."""

    exit_code = EXIT_GENERIC_FAILURE
