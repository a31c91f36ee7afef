"""Exception hierarchy for specfields.

All exceptions inherit from :class:`SpecfieldsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specfields.exit_codes`.
The CLI entry point :func:`specfields.app.main` catches ``SpecfieldsError``
and exits with the matching code.

Compile faults are programming or document-correctness errors.  They are
raised at the point of detection and never retried.

Subclass hierarchy::

    SpecfieldsError (exit 1)
    +-- InvalidUsageError               (exit 2)
    +-- SpecParseError                  (exit 7)
    +-- ConfigError                     (exit 1)
    +-- CompileError                    (exit 8)
        +-- MissingSchemaError
        +-- UnknownParameterLocationError
        +-- UnsupportedBodyShapeError
        +-- EmptyContentError
"""

from specfields.exit_codes import (
    EXIT_COMPILE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecfieldsError(Exception):
    """Base exception for all specfields errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecfieldsError):
    """Raised for invalid CLI arguments (e.g. an unknown operation to inspect)."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecfieldsError):
    """Raised when the OpenAPI document cannot be loaded, validated, or dereferenced."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(SpecfieldsError):
    """Raised for unreadable or invalid builder configuration."""

    exit_code = EXIT_GENERIC_FAILURE


class CompileError(SpecfieldsError):
    """Raised when an operation cannot be compiled into field descriptors."""

    exit_code = EXIT_COMPILE_ERROR


class MissingSchemaError(CompileError):
    """A parameter has neither a ``schema`` nor a JSON ``content`` entry with one."""


class UnknownParameterLocationError(CompileError):
    """A parameter's ``in`` value is not one of ``query``, ``path``, ``header``."""


class UnsupportedBodyShapeError(CompileError):
    """A request body schema is not an array, an object, or a supported scalar."""


class EmptyContentError(CompileError):
    """A request body declares no media types at all."""
