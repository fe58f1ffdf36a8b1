"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specform.exceptions.SpecformError` subclass.
Shell wrappers can inspect the exit code to tell a bad description apart
from a rejected form without parsing stderr.

Example::

    $ specform request ./missing.json
    $ echo $?
    7   # EXIT_LOAD_ERROR -- the description could not be loaded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unknown operation."""

EXIT_LOAD_ERROR = 7
"""The API description could not be fetched, parsed, or validated."""

EXIT_UNSUPPORTED_CONTENT = 8
"""The selected operation has a request body without a JSON representation."""

EXIT_FIELD_ERROR = 9
"""A form field could not be coerced or parsed when the form was committed."""

EXIT_EXECUTION_ERROR = 11
"""The rendered command could not be run or exited with a failure status."""

EXIT_INTERRUPTED = 130
"""The session was cancelled with Ctrl-C."""
