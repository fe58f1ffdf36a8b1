"""Interactive pieces of the CLI.

* :mod:`~specform.commands.picker` -- operation selection.
* :mod:`~specform.commands.form` -- prompt-driven form filling.
"""
