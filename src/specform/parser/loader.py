"""Load API descriptions from a URL, local file, or stdin.

This module handles all I/O for fetching raw OpenAPI documents and converting
them into Python dictionaries. It supports both JSON and YAML formats with
automatic format detection, and validates that the document declares a
supported OpenAPI version (3.x).

Both loaders keep the document's key order, which is what gives form
fields (and request-body keys) their declaration order.

The two public functions are:

* :func:`load_spec` -- Load and parse a description from any supported source.
* :func:`validate_openapi_version` -- Check and return the ``openapi`` version
  string, rejecting Swagger 2.x documents.

Every failure raises :class:`~specform.exceptions.LoadError`, which ends the
run before any form is opened.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specform.exceptions import LoadError

FETCH_TIMEOUT = 30.0


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI description from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed description as a dictionary.

    Raises:
        LoadError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read the description from stdin."""
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise LoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise LoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch the description from *url*. Supports JSON and YAML responses.

    Raises:
        LoadError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise LoadError(
            f"HTTP {exc.response.status_code} fetching description from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise LoadError(f"Failed to fetch description from {url}: {exc}") from exc

    # Use content-type as a hint for parsing
    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load the description from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise LoadError(f"Description file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"Failed to read description file {path}: {exc}") from exc

    if not content.strip():
        raise LoadError(f"Description file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        LoadError: If the content cannot be parsed as either format, or is
            not a mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            # If the hint was explicitly JSON, don't try YAML
            if hint == "json":
                raise LoadError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse description as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise LoadError(msg) from exc

    return _require_mapping(result)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise LoadError(f"Description must be a JSON/YAML object (got {kind})")
    return result


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Supports OpenAPI 3.x. Raises for Swagger 2.x, missing version fields,
    or other major versions.

    Returns:
        The OpenAPI version string (e.g., '3.0.3', '3.1.0').

    Raises:
        LoadError: If the version is missing, unsupported, or indicates Swagger 2.x.
    """
    if "swagger" in spec:
        raise LoadError(
            f"Swagger {spec['swagger']} is not supported. "
            "Only OpenAPI 3.x descriptions are supported."
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise LoadError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version_str = str(openapi_version)
    if version_str.startswith("3."):
        return version_str

    raise LoadError(
        f"Unsupported OpenAPI version: {version_str}. "
        "Only OpenAPI 3.x descriptions are supported."
    )
