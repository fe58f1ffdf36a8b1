"""Shared test fixtures for specform.

Provides reusable fixtures for loading the users API description, building
operations and form sessions, isolating ``SPECFORM_*`` environment
variables, managing output state, and running CLI commands. These fixtures
are automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specform.models import (
    APIOperation,
    HTTPMethod,
    ParsedSpec,
    PropertySchema,
    RequestBodyInfo,
    SchemaType,
)
from specform.output import OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear SPECFORM_* variables and colour hints that might leak into tests."""
    for var in [
        "SPECFORM_PLACEHOLDER",
        "SPECFORM_PROBE_TIMEOUT",
        "SPECFORM_NO_EXEC",
        "SPECFORM_SORT_FIELDS",
        "NO_COLOR",
    ]:
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Description fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def users_api_path() -> Path:
    """Path to the users API description fixture."""
    return FIXTURES_DIR / "users_api.json"


@pytest.fixture
def users_api_raw(users_api_path: Path) -> dict[str, Any]:
    """Load the raw users API description dict."""
    with open(users_api_path) as f:
        return json.load(f)


@pytest.fixture
def users_spec(users_api_raw: dict[str, Any]) -> ParsedSpec:
    """Parsed users API description."""
    from specform.parser.extractor import extract_spec

    return extract_spec(users_api_raw, "3.0.3")


# ---------------------------------------------------------------------------
# Operation fixtures
# ---------------------------------------------------------------------------


USER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "integer"},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
}


@pytest.fixture
def create_user_op() -> APIOperation:
    """POST /users with a {name: string, age: integer, tags: array} body."""
    return APIOperation(
        path="/users",
        method=HTTPMethod.POST,
        operation_id="createUser",
        request_body=RequestBodyInfo(
            content_types=["application/json"],
            json_schema=USER_SCHEMA,
        ),
    )


@pytest.fixture
def user_properties() -> list[PropertySchema]:
    """The {name, age, tags} property set in declaration order."""
    return [
        PropertySchema(name="name", declared_type=SchemaType.STRING, schema={"type": "string"}),
        PropertySchema(name="age", declared_type=SchemaType.INTEGER, schema={"type": "integer"}),
        PropertySchema(
            name="tags",
            declared_type=SchemaType.ARRAY,
            schema={"type": "array", "items": {"type": "string"}},
        ),
    ]


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a colourless, quiet OutputManager for tests that don't care about output."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
