"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specfields.exceptions.SpecfieldsError` subclass.
Scripts wrapping ``specfields build`` can branch on the exit code instead of
parsing stderr.

Example::

    $ specfields build broken.yaml
    $ echo $?
    8   # EXIT_COMPILE_ERROR -- an operation could not be compiled
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded, validated, or dereferenced."""

EXIT_COMPILE_ERROR = 8
"""An operation's parameters or request body could not be compiled into fields."""
