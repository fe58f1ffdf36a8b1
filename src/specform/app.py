"""Typer application and CLI entry point for specform.

Commands:

* ``specform request SOURCE`` -- pick an operation, fill in its request
  body, print the equivalent ``curl`` command, and run it when the
  description came from a live host.
* ``specform operations SOURCE`` -- list the operations a form can be
  built for.
* ``specform fields SOURCE -X "POST /users"`` -- list an operation's form
  fields.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Commands report :class:`~specform.exceptions.SpecformError`
themselves and exit with the error's code; anything else escaping a
command is reported by :func:`main` as an unexpected failure.

See Also:
    :mod:`specform.config`: Flag/environment resolution.
    :mod:`specform.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from typing import Any, NoReturn, Optional

import typer

from specform import __version__
from specform.exceptions import ExecutionError, InvalidUsageError, SpecformError
from specform.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from specform.models import APIOperation, ParsedSpec


app = typer.Typer(
    name="specform",
    help="Build JSON request bodies for OpenAPI operations and render them as curl commands.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specform {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~specform.output.OutputManager` from CLI
    flags and, with ``--verbose``, routes library logging to stderr.
    """
    from specform.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="[%(name)s] %(message)s",
        )


def _fail(exc: SpecformError) -> NoReturn:
    """Report *exc* and exit with its code."""
    from specform.output import error

    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def _load_description(source: str, timeout: float) -> tuple[ParsedSpec, Optional[str]]:
    """Resolve, load and extract the description named by *source*.

    Returns:
        The parsed description and the live host origin (``None`` for
        files and stdin).
    """
    from specform.output import debug, info
    from specform.parser import extract_spec, load_spec, resolve_source, validate_openapi_version

    resolved = resolve_source(source, timeout=timeout)
    debug(f"Loading description from {resolved.location}")
    raw = load_spec(resolved.location)
    spec = extract_spec(raw, validate_openapi_version(raw))
    if resolved.origin:
        info(f"Target host: {resolved.origin}")
    return spec, resolved.origin


def _select_operation(
    spec: ParsedSpec,
    selector: Optional[str],
    query: Optional[str],
    no_input: bool,
) -> APIOperation:
    """Pick the operation from an explicit selector, a filter, or a prompt."""
    from specform.commands.picker import (
        filter_operations,
        find_operation,
        is_selectable,
        pick_operation,
        selectable_operations,
    )

    if selector:
        op = find_operation(spec.operations, selector)
        # Bodies offered only as non-JSON are reported when the form opens.
        if op.request_body is None and not is_selectable(op):
            raise InvalidUsageError(
                f"{op.method.value.upper()} {op.path} does not define a request body"
            )
        return op

    candidates = selectable_operations(spec.operations)
    if query:
        candidates = filter_operations(candidates, query)
        if not candidates:
            raise InvalidUsageError(f"No operation matches '{query}'")
    if not candidates:
        raise InvalidUsageError(f"{spec.title} has no operations a request form can be built for")
    if no_input and len(candidates) > 1:
        raise InvalidUsageError(
            f"{len(candidates)} operations match; use --operation with --no-input"
        )
    return pick_operation(candidates, title=f"{spec.title} {spec.version}")


@app.command("request")
def request_command(
    source: str = typer.Argument(
        ..., help="Description file, URL, bare host name, or '-' for stdin."
    ),
    operation: Optional[str] = typer.Option(
        None, "--operation", "-X", help="Operation as 'METHOD PATH', e.g. 'POST /users'."
    ),
    query: Optional[str] = typer.Option(
        None, "--filter", "-f", help="Fuzzy filter applied to the operation list."
    ),
    presets: Optional[list[str]] = typer.Option(
        None, "--set", "-s", help="Pre-fill a field: NAME=VALUE (repeatable)."
    ),
    no_exec: bool = typer.Option(
        False, "--no-exec", help="Print the command without running it."
    ),
    no_input: bool = typer.Option(
        False, "--no-input", help="Do not prompt; commit the --set values as-is."
    ),
    placeholder: Optional[str] = typer.Option(
        None, "--placeholder", help="Host token used when no live host is known."
    ),
    sort_fields: bool = typer.Option(
        False, "--sort-fields", help="Order fields by name instead of schema order."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds allowed for each host-discovery probe."
    ),
) -> None:
    """Fill in a request body for an operation and print the curl command.

    The command is also executed when the description was fetched from a
    live host (unless --no-exec is given).

    Example::

        specform request ./openapi.json -X "POST /users" --set name=Ann --set age=30
        specform request api.example.com --filter users
    """
    from specform.commands.form import run_form
    from specform.config import parse_presets, resolve_config
    from specform.form.session import FormSession
    from specform.output import info, print_command, suggest, warning
    from specform.render import execute_command, render_command

    try:
        config = resolve_config(
            cli_placeholder=placeholder,
            cli_timeout=timeout,
            cli_no_exec=no_exec,
            cli_sort_fields=sort_fields,
        )
        field_presets = parse_presets(presets)
        spec, origin = _load_description(source, config.probe_timeout)
        op = _select_operation(spec, operation, query, no_input)

        session = FormSession.open(op, sort=config.sort_fields)
        if op.request_body is None:
            info("NOTE: The selected operation does not have a request body.")

        body = run_form(session, field_presets, no_input=no_input)
        if body is None:
            info("Cancelled.")
            return

        rendered = render_command(
            op.method, op.path, body, host=origin, placeholder=config.placeholder_host
        )
    except SpecformError as exc:
        _fail(exc)

    print_command(rendered.command)

    if rendered.is_placeholder:
        suggest(f"Replace {rendered.host} with the API origin before running the command")
        return
    if not config.execute:
        return
    try:
        execute_command(rendered)
    except ExecutionError as exc:
        warning(str(exc))


@app.command("operations")
def operations_command(
    source: str = typer.Argument(
        ..., help="Description file, URL, bare host name, or '-' for stdin."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds allowed for each host-discovery probe."
    ),
) -> None:
    """List the operations a request form can be built for."""
    from specform.commands.picker import selectable_operations
    from specform.config import resolve_config
    from specform.output import print_table

    try:
        config = resolve_config(cli_timeout=timeout)
        spec, _ = _load_description(source, config.probe_timeout)
    except SpecformError as exc:
        _fail(exc)

    rows: list[list[str]] = []
    for op in selectable_operations(spec.operations):
        rows.append([
            op.method.value.upper(),
            op.path,
            op.summary or "-",
            "json" if op.request_body is not None else "-",
        ])
    print_table(
        ["Method", "Path", "Summary", "Body"],
        rows,
        title=f"{spec.title} -- Operations ({len(rows)})",
    )


@app.command("fields")
def fields_command(
    source: str = typer.Argument(
        ..., help="Description file, URL, bare host name, or '-' for stdin."
    ),
    operation: str = typer.Option(
        ..., "--operation", "-X", help="Operation as 'METHOD PATH'."
    ),
    sort_fields: bool = typer.Option(
        False, "--sort-fields", help="Order fields by name instead of schema order."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds allowed for each host-discovery probe."
    ),
) -> None:
    """List the form fields of an operation's request body."""
    from specform.commands.picker import find_operation
    from specform.config import resolve_config
    from specform.form.fields import build_form
    from specform.output import print_table

    try:
        config = resolve_config(cli_timeout=timeout, cli_sort_fields=sort_fields)
        spec, _ = _load_description(source, config.probe_timeout)
        op = find_operation(spec.operations, operation)
        fields = build_form(op, sort=config.sort_fields)
    except SpecformError as exc:
        _fail(exc)

    print_table(
        ["Name", "Type", "Kind"],
        [[f.name, f.declared_type.value, f.kind.value] for f in fields],
        title=f"{op.label.strip()} -- Fields ({len(fields)})",
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``specform`` console script.

    Unhandled :class:`~specform.exceptions.SpecformError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a generic failure exit; the traceback is printed with ``--verbose``.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from specform.output import error, get_output

        if isinstance(exc, SpecformError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        if get_output().is_verbose:
            sys.stderr.write(traceback.format_exc())
        sys.exit(EXIT_GENERIC_FAILURE)
