"""Session configuration with flag/environment precedence resolution.

specform keeps no configuration file and no on-disk state: every setting
comes from a CLI flag, an environment variable, or a default, and lives
only as long as the session. This module merges those layers into a
validated :class:`~specform.models.SessionConfig`.

Environment variables:

* ``SPECFORM_PLACEHOLDER`` -- host token used when no live target is known
  (default ``$TARGET``).
* ``SPECFORM_PROBE_TIMEOUT`` -- seconds allowed for each host-discovery
  probe (default ``5``).
* ``SPECFORM_NO_EXEC`` -- when truthy, never run the rendered command.
* ``SPECFORM_SORT_FIELDS`` -- when truthy, order form fields by name.

It also parses ``--set NAME=VALUE`` presets for the form.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import ValidationError

from specform.exceptions import ConfigError, InvalidUsageError
from specform.models import SessionConfig

_ENV_PREFIX = "SPECFORM_"
_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


def _env(name: str) -> Optional[str]:
    """Return the value of ``SPECFORM_<name>``, or None when unset."""
    return os.environ.get(f"{_ENV_PREFIX}{name}")


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable.

    Raises:
        ConfigError: If the variable is set to something that is neither
            truthy nor falsy.
    """
    raw = _env(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{_ENV_PREFIX}{name} must be a boolean (got {raw!r})")


def resolve_config(
    cli_placeholder: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    cli_no_exec: bool = False,
    cli_sort_fields: bool = False,
) -> SessionConfig:
    """Resolve the session config with full precedence chain.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``SPECFORM_*``)
        3. Defaults

    Boolean flags can only switch behaviour on, so a ``False`` flag falls
    through to the environment.

    Returns:
        The validated :class:`~specform.models.SessionConfig`.

    Raises:
        ConfigError: If an environment variable or flag holds a value the
            model rejects (e.g. a non-positive timeout).
    """
    values: dict[str, Any] = {}

    # 2. Environment variables
    env_placeholder = _env("PLACEHOLDER")
    if env_placeholder:
        values["placeholder_host"] = env_placeholder
    env_timeout = _env("PROBE_TIMEOUT")
    if env_timeout:
        values["probe_timeout"] = env_timeout
    no_exec = _env_flag("NO_EXEC")
    if no_exec is not None:
        values["execute"] = not no_exec
    sort_fields = _env_flag("SORT_FIELDS")
    if sort_fields is not None:
        values["sort_fields"] = sort_fields

    # 1. CLI flags (highest precedence)
    if cli_placeholder is not None:
        values["placeholder_host"] = cli_placeholder
    if cli_timeout is not None:
        values["probe_timeout"] = cli_timeout
    if cli_no_exec:
        values["execute"] = False
    if cli_sort_fields:
        values["sort_fields"] = True

    try:
        return SessionConfig.model_validate(values)
    except ValidationError as exc:
        problems = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration ({problems})") from exc


def parse_presets(items: Optional[list[str]]) -> dict[str, str]:
    """Split ``--set NAME=VALUE`` items into a name -> text mapping.

    Only the first ``=`` separates name and value, so values may contain
    ``=`` themselves. Later items win over earlier ones.

    Raises:
        InvalidUsageError: If an item has no ``=`` or an empty name.
    """
    presets: dict[str, str] = {}
    for item in items or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise InvalidUsageError(f"Expected NAME=VALUE for --set, got {item!r}")
        presets[name] = value
    return presets
