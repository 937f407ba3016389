"""Config utility for persistent renamer settings.

Provides functions to read and write default settings (separator, ffprobe
binary, worker limit) in ~/.config/renamer/config.toml. Uses tomli/tomli-w for
TOML parsing and writing.
"""

from pathlib import Path
from typing import Any, TypeVar, cast
import os
import contextlib

import tomli
import tomli_w

from renamer.models.config import DEFAULT_SEPARATOR

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/renamer or $XDG_CONFIG_HOME/renamer
CONFIG_DIR = _xdg_config_home / "renamer"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_FFPROBE = "ffprobe"
DEFAULT_MAX_WORKERS = 100
DEFAULT_PROBE_TIMEOUT = 30.0


def get_default_separator() -> str:
    """Read the default separator from the environment or config.toml.

    Returns:
        str: The configured separator, or ``"_"`` if not set.
    """
    return resolve_setting("separator", default=DEFAULT_SEPARATOR)


def set_default_separator(separator: str) -> None:
    """Persist the default separator in config.toml.

    Args:
        separator (str): The separator to use when ``--separator`` is omitted.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    data["separator"] = separator
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


# ---------------------------------------------------------------------------
# Generic configuration resolution
# ---------------------------------------------------------------------------

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="probe.ffprobe" will attempt
    ``data["probe"]["ffprobe"]`` returning None if any level is missing.
    """

    keys = dotted_key.split(".")
    current: Any = data
    for part in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "RENAMER_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "probe.max_workers" -> "RENAMER_PROBE_MAX_WORKERS".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Coerce a raw env/config *value* to the type of *default*.

    Falls back to *default* when the value cannot be interpreted.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in {"1", "true", "yes", "on"})
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cast(T, float(value))
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, float(value))
        return default
    if isinstance(default, str):
        return cast(T, value if isinstance(value, str) else str(value))
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"probe.ffprobe"`` or ``"separator"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default


def effective_settings() -> dict[str, Any]:
    """Return every setting renamer consumes, resolved with normal precedence."""
    return {
        "separator": get_default_separator(),
        "probe.ffprobe": resolve_setting("probe.ffprobe", default=DEFAULT_FFPROBE),
        "probe.max_workers": resolve_setting(
            "probe.max_workers", default=DEFAULT_MAX_WORKERS
        ),
        "probe.timeout": resolve_setting("probe.timeout", default=DEFAULT_PROBE_TIMEOUT),
    }
