"""API description parser -- locate, load, resolve ``$ref`` pointers, extract operations.

Typical usage::

    from specform.parser import extract_spec, load_spec, resolve_source, validate_openapi_version

    source = resolve_source("api.example.com")
    raw = load_spec(source.location)
    parsed = extract_spec(raw, validate_openapi_version(raw))

Sub-modules:

* :mod:`~specform.parser.discovery` -- protocol discovery and host origin.
* :mod:`~specform.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~specform.parser.resolver` -- internal ``$ref`` inlining.
* :mod:`~specform.parser.extractor` -- operations and request-body
  properties.
"""

from specform.parser.discovery import ResolvedSource, resolve_source
from specform.parser.extractor import extract_spec, schema_properties
from specform.parser.loader import load_spec, validate_openapi_version

__all__ = [
    "ResolvedSource",
    "extract_spec",
    "load_spec",
    "resolve_source",
    "schema_properties",
    "validate_openapi_version",
]
