"""specform -- build JSON request bodies for OpenAPI operations.

Point specform at an OpenAPI 3.x description, pick an operation, and fill
in a form generated from the operation's JSON request-body schema. The
filled-in form is turned into a typed request body and rendered as the
equivalent ``curl`` command, which is also run when the description came
from a live host.

Typical workflow::

    specform operations ./openapi.json
    specform request ./openapi.json -X "POST /users"
    specform request api.example.com --filter users

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Flag/environment configuration resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    parser: Description discovery, loading, and extraction.
    form: Field model, coercion, and request-body assembly.
    render: curl command rendering and execution.
"""

__version__ = "0.1.0"
