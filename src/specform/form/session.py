"""One form-editing session for a single operation.

A :class:`FormSession` owns the field list from the moment the form opens
until it is committed or cancelled. Edits are filtered through the
classifier's acceptance predicates; a commit either returns the assembled
request body and closes the session, or raises
:class:`~specform.exceptions.CommitRejected` with every failing field and
leaves the session open so the fields can be corrected.

The session is UI-agnostic: :mod:`specform.commands.form` drives it with
terminal prompts, and tests drive it directly.
"""

from __future__ import annotations

import enum
from typing import Iterator, Optional

from specform.exceptions import CommitRejected, InvalidUsageError
from specform.form.assembler import assemble_body, collect_errors
from specform.form.classifier import classify_type
from specform.form.fields import build_form
from specform.models import APIOperation, FieldKind, FormField, RequestBodyDraft


class SessionState(str, enum.Enum):
    OPEN = "open"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class FormSession:
    """Editable form state for *operation*.

    Args:
        operation: The operation whose request body is being built.
        fields: The field list, usually from
            :func:`~specform.form.fields.build_form`.

    Example::

        session = FormSession.open(operation)
        session.edit("age", "30")
        body = session.commit()
    """

    def __init__(self, operation: APIOperation, fields: list[FormField]) -> None:
        self.operation = operation
        self._fields = fields
        self._index = {f.name: f for f in fields}
        self.state = SessionState.OPEN
        self.draft: Optional[RequestBodyDraft] = None

    @classmethod
    def open(cls, operation: APIOperation, *, sort: bool = False) -> "FormSession":
        """Build the fields for *operation* and open a session over them.

        Raises:
            UnsupportedContentTypeError: If the operation's body is not JSON.
        """
        return cls(operation, build_form(operation, sort=sort))

    @property
    def fields(self) -> list[FormField]:
        return list(self._fields)

    @property
    def is_open(self) -> bool:
        return self.state == SessionState.OPEN

    def __iter__(self) -> Iterator[FormField]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def field(self, name: str) -> FormField:
        """Return the field called *name*.

        Raises:
            InvalidUsageError: If the form has no such field.
        """
        try:
            return self._index[name]
        except KeyError:
            known = ", ".join(self._index) or "none"
            raise InvalidUsageError(
                f"Unknown field '{name}' for {self.operation.label.strip()} (fields: {known})"
            ) from None

    def accepts(self, name: str, text: str) -> bool:
        """Whether *text* would be accepted as the new content of field *name*."""
        field = self.field(name)
        if field.kind == FieldKind.COMPOUND:
            return True
        accept = classify_type(field.declared_type).accept
        return accept is None or accept(text)

    def edit(self, name: str, text: str) -> bool:
        """Replace the text of field *name*.

        Returns:
            ``True`` if the text was taken, ``False`` if the field's
            acceptance predicate rejected it (the old text is kept).

        Raises:
            InvalidUsageError: If the session is closed or the field is unknown.
        """
        self._ensure_open()
        if not self.accepts(name, text):
            return False
        self._index[name].current_text = text
        return True

    def errors(self) -> dict[str, str]:
        """Return the reason each field would currently fail to commit."""
        return collect_errors(self._fields)

    def commit(self) -> RequestBodyDraft:
        """Assemble the request body and close the session.

        Raises:
            CommitRejected: If any field fails to coerce or parse; the
                session stays open.
            InvalidUsageError: If the session is already closed.
        """
        self._ensure_open()
        errors = self.errors()
        if errors:
            raise CommitRejected(errors)
        self.draft = assemble_body(self._fields)
        self.state = SessionState.COMMITTED
        return self.draft

    def cancel(self) -> None:
        """Close the session without producing a request body."""
        self._ensure_open()
        self.state = SessionState.CANCELLED

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise InvalidUsageError(f"Form session is already {self.state.value}")
