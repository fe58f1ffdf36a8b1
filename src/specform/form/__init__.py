"""Schema-driven form model -- classify, build, coerce, and assemble.

This sub-package turns an operation's JSON request-body schema into
editable fields and turns the edited fields back into a typed request
body:

* :mod:`~specform.form.classifier` -- primitive/compound split and input
  acceptance predicates.
* :mod:`~specform.form.reflow` -- JSON parse and stable re-rendering.
* :mod:`~specform.form.fields` -- one field per schema property.
* :mod:`~specform.form.coercion` -- field text to typed value.
* :mod:`~specform.form.assembler` -- ordered request body.
* :mod:`~specform.form.session` -- edit/commit/cancel lifecycle.
"""

from specform.form.assembler import assemble_body, collect_errors
from specform.form.classifier import classify
from specform.form.coercion import coerce_field
from specform.form.fields import build_fields, build_form
from specform.form.reflow import parse_json, reflow, render_json
from specform.form.session import FormSession, SessionState

__all__ = [
    "FormSession",
    "SessionState",
    "assemble_body",
    "build_fields",
    "build_form",
    "classify",
    "coerce_field",
    "collect_errors",
    "parse_json",
    "reflow",
    "render_json",
]
