"""Terminal form for filling in a request body.

Drives a :class:`~specform.form.session.FormSession` with Typer prompts.
Everything the form shows (labels, schema previews, prompts, validation
messages) goes to stderr so that stdout carries only the rendered command.

Flow:

1. ``--set NAME=VALUE`` presets are applied first; with ``--no-input``
   the form is committed straight away.
2. Every field without a preset is prompted for. Compound fields show
   their schema as read-only JSON and take a JSON value (or
   ``@filename``). Text a field's acceptance rule rejects is refused and
   asked for again.
3. Commit problems are listed per field and only those fields are asked
   again. Once the form is clean the user sends, edits a field, or
   cancels.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
import typer

from specform.exceptions import InvalidUsageError
from specform.form.session import FormSession
from specform.models import FieldKind, FormField, RequestBodyDraft
from specform.output import get_output

SEND, EDIT, CANCEL = "send", "edit", "cancel"


def resolve_compound_text(raw: str) -> str:
    """Resolve ``@filename`` references in compound field input.

    If *raw* starts with ``@``, the rest is a file path whose UTF-8
    contents become the field text. Otherwise *raw* is returned as-is.

    Raises:
        InvalidUsageError: If the referenced file does not exist.
    """
    if not raw.startswith("@"):
        return raw
    file_path = Path(raw[1:]).expanduser()
    if not file_path.is_file():
        raise InvalidUsageError(f"JSON file not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def apply_presets(session: FormSession, presets: dict[str, str]) -> None:
    """Fill fields from ``--set`` values.

    Raises:
        InvalidUsageError: For an unknown field, or a value the field's
            acceptance rule rejects.
    """
    for name, raw in presets.items():
        field = session.field(name)
        text = resolve_compound_text(raw) if field.kind == FieldKind.COMPOUND else raw
        if not session.edit(name, text):
            raise InvalidUsageError(
                f"--set {name}: {raw!r} is not a valid {field.declared_type.value} value"
            )


def prompt_field(session: FormSession, field: FormField) -> None:
    """Ask for one field's text until the field accepts it."""
    out = get_output()
    out.show_heading(field.label)
    if field.description:
        out.info(field.description)
    if field.kind == FieldKind.COMPOUND:
        out.show_json(field.preview)

    while True:
        raw = typer.prompt(
            field.name,
            default=field.current_text,
            show_default=bool(field.current_text),
            err=True,
        )
        try:
            text = resolve_compound_text(raw) if field.kind == FieldKind.COMPOUND else raw
        except InvalidUsageError as exc:
            out.warning(str(exc))
            continue
        if session.edit(field.name, text):
            return
        out.warning(f"{raw!r} is not a valid {field.declared_type.value} value")


def run_form(
    session: FormSession,
    presets: Optional[dict[str, str]] = None,
    no_input: bool = False,
) -> Optional[RequestBodyDraft]:
    """Fill in and commit *session*.

    Returns:
        The committed request body, or ``None`` if the user cancelled.

    Raises:
        InvalidUsageError: If a preset is invalid.
        CommitRejected: With ``no_input``, if the presets do not make a
            valid form.
    """
    presets = presets or {}
    apply_presets(session, presets)
    if no_input:
        return session.commit()

    out = get_output()
    out.show_heading(session.operation.label)
    for field in session:
        if field.name not in presets:
            prompt_field(session, field)

    while True:
        errors = session.errors()
        if errors:
            for name, reason in errors.items():
                out.error(f"{name}: {reason}")
            for name in errors:
                prompt_field(session, session.field(name))
            continue

        action = typer.prompt(
            "Send, edit a field, or cancel",
            type=click.Choice([SEND, EDIT, CANCEL]),
            default=SEND,
            err=True,
        )
        if action == SEND:
            return session.commit()
        if action == CANCEL:
            session.cancel()
            return None
        if len(session):
            name = typer.prompt(
                "Field",
                type=click.Choice([f.name for f in session]),
                err=True,
            )
            prompt_field(session, session.field(name))
