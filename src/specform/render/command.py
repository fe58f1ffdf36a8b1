"""Render an assembled request as a ``curl`` command line.

The command has the fixed shape::

    curl -v -X <METHOD> <HOST><PATH> -H 'Content-Type: application/json' -d '<JSON_BODY>'

When no live host is known, a placeholder token (``$TARGET`` by default)
stands in for the host so the command stays copy-pasteable; it is left
unquoted so the shell expands it. The JSON body is always single-quoted
with embedded single quotes escaped, so no character in the payload is
interpreted by the shell.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional, Union

from specform.models import HTTPMethod, RenderedCommand

DEFAULT_PLACEHOLDER = "$TARGET"
CONTENT_TYPE_HEADER = "Content-Type: application/json"

# URL characters that no common shell treats specially outside quotes.
# Braces and commas are excluded: bash and zsh brace-expand them.
_SHELL_SAFE_URL_RE = re.compile(r"[A-Za-z0-9/_.~%:@+=\-]*")


def shell_quote(text: str) -> str:
    """Wrap *text* in single quotes, escaping any single quotes inside it.

    Each ``'`` becomes ``'\\''`` (close quote, escaped quote, reopen), the
    only way to embed a single quote in a single-quoted shell word.

    Example::

        >>> shell_quote("it's")
        "'it'\\\\''s'"
    """
    return "'" + text.replace("'", "'\\''") + "'"


def _url_word(text: str) -> str:
    """Return *text* bare when it is shell-safe, single-quoted otherwise."""
    if _SHELL_SAFE_URL_RE.fullmatch(text):
        return text
    return shell_quote(text)


def serialize_body(body: Any) -> str:
    """Serialise the request body as compact JSON, keeping key order."""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def render_command(
    method: Union[HTTPMethod, str],
    path: str,
    body: Any,
    host: Optional[str] = None,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> RenderedCommand:
    """Render the ``curl`` invocation for one request.

    Args:
        method: HTTP method; rendered upper-case.
        path: Path template, with path parameters left unsubstituted.
        body: The assembled request body.
        host: Resolved origin such as ``"https://api.example.com"``, or
            ``None`` when no live target is known.
        placeholder: Host token used when *host* is ``None``.

    Returns:
        The :class:`~specform.models.RenderedCommand`.
    """
    verb = method.value if isinstance(method, HTTPMethod) else str(method)
    is_placeholder = host is None
    target = placeholder if is_placeholder else host.rstrip("/")
    host_word = target if is_placeholder else _url_word(target)
    payload = serialize_body(body)

    command = " ".join([
        "curl",
        "-v",
        "-X",
        verb.upper(),
        host_word + _url_word(path),
        "-H",
        shell_quote(CONTENT_TYPE_HEADER),
        "-d",
        shell_quote(payload),
    ])
    return RenderedCommand(
        command=command,
        host=target,
        is_placeholder=is_placeholder,
        body=payload,
    )
