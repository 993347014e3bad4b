"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~specview.exceptions.SpecviewError` subclass.
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""The requested operation does not exist in the document."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be parsed."""

EXIT_INVALID_OPERATION = 8
"""An operation fragment is structurally invalid (missing verb or path)."""
