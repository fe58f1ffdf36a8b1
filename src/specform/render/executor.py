"""Run a rendered command through the shell.

The command is executed with ``sh -c`` and inherits the caller's stdout and
stderr, so curl's verbose output goes straight to the terminal. The call
blocks until the process exits. Only the exit status is inspected.
"""

from __future__ import annotations

import logging
import subprocess

from specform.exceptions import ExecutionError
from specform.models import RenderedCommand

logger = logging.getLogger(__name__)

SHELL = "sh"


def execute_command(rendered: RenderedCommand) -> None:
    """Run *rendered* and wait for it to finish.

    Raises:
        ExecutionError: If the shell cannot be started or the command exits
            with a non-zero status.
    """
    logger.debug("Executing: %s", rendered.command)
    try:
        result = subprocess.run([SHELL, "-c", rendered.command], check=False)
    except OSError as exc:
        raise ExecutionError(f"Could not run command: {exc}") from exc

    logger.debug("Command exited with status %d", result.returncode)
    if result.returncode != 0:
        raise ExecutionError(f"Command exited with status {result.returncode}")
