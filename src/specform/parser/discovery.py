"""Resolve where to load a description from and which host it lives on.

``specform`` accepts four kinds of source:

* ``-`` -- the description is read from stdin; no live host;
* an existing file path, or any path starting with ``/``, ``./``, ``../`` or
  ``~`` -- no live host;
* a URL with a scheme -- the host origin is ``scheme://netloc``;
* a bare host name (``api.example.com:8080``) -- the protocol is
  discovered by probing ``https://`` and then ``http://``.

For URLs and host names, ``/openapi.json`` is appended unless the location
already names a ``.json``/``.yaml``/``.yml`` document. Only sources reached
over the network produce a host origin, and only then is the rendered
command executed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple, Optional
from urllib.parse import urlsplit

import httpx

from specform.exceptions import LoadError

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 5.0
DEFAULT_DOCUMENT = "openapi.json"
_DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")
# Sources with these prefixes are always file paths, even when missing.
_PATH_PREFIXES = ("/", "./", "../", "~")


class ResolvedSource(NamedTuple):
    """Where to load the description from, and the live host origin if any."""

    location: str
    origin: Optional[str]


def probe(url: str, timeout: float = DEFAULT_PROBE_TIMEOUT) -> bool:
    """Return True if an HTTP GET to *url* gets any response within *timeout*.

    The status code does not matter; only connection, TLS handshake and
    read failures count as unreachable. Never raises for network errors.
    """
    try:
        with httpx.Client(timeout=httpx.Timeout(timeout), follow_redirects=False) as client:
            client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("Probe of %s failed: %s", url, exc)
        return False
    return True


def discover_base_url(host: str, timeout: float = DEFAULT_PROBE_TIMEOUT) -> str:
    """Return ``https://host`` or ``http://host``, whichever answers first.

    Raises:
        LoadError: If neither protocol answers.
    """
    for scheme in ("https", "http"):
        candidate = f"{scheme}://{host}"
        if probe(candidate, timeout):
            logger.info("%s is available for %s", scheme.upper(), host)
            return candidate
    raise LoadError(f"Don't know how to reach {host}: neither HTTPS nor HTTP answered")


def document_url(url: str) -> str:
    """Append ``/openapi.json`` unless *url* already names a document."""
    if urlsplit(url).path.lower().endswith(_DOCUMENT_SUFFIXES):
        return url
    return f"{url.rstrip('/')}/{DEFAULT_DOCUMENT}"


def origin_of(url: str) -> str:
    """Return the ``scheme://netloc`` origin of *url*."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def resolve_source(source: str, timeout: float = DEFAULT_PROBE_TIMEOUT) -> ResolvedSource:
    """Work out the load location and host origin for *source*.

    Raises:
        LoadError: If *source* is empty, or is a bare host that answers on
            neither protocol.
    """
    if not source:
        raise LoadError("No description source given")
    if source == "-" or source.startswith(_PATH_PREFIXES) or Path(source).is_file():
        return ResolvedSource(location=source, origin=None)

    if source.startswith(("http://", "https://")):
        base = source
    else:
        base = discover_base_url(source, timeout)

    return ResolvedSource(location=document_url(base), origin=origin_of(base))
