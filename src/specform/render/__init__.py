"""Command rendering and execution.

* :mod:`~specform.render.command` -- build the ``curl`` command line with
  safe quoting and a placeholder host.
* :mod:`~specform.render.executor` -- run the command with inherited stdio.
"""

from specform.render.command import render_command, serialize_body, shell_quote
from specform.render.executor import execute_command

__all__ = ["execute_command", "render_command", "serialize_body", "shell_quote"]
