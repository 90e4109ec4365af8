"""Scanner configuration helpers.

Configuration is sourced from (in order of precedence):

1. Explicit overrides provided to :func:`get_config` (the CLI options).
2. Environment variables prefixed with ``HULUD_``.
3. A YAML file given explicitly or through ``$HULUD_CONFIG``.
4. Built-in defaults.

A missing configuration file simply results in the defaults being used.
Malformed files raise :class:`~hulud_scan.core.errors.ConfigurationError`
since nothing should be scanned with half-applied settings.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigurationError

ENV_PREFIX = "HULUD_"
CONFIG_ENV_VAR = "HULUD_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "INFO",
    "signature_file": None,
    "allowlist": [],
    "strict": False,
    "color": True,
    "output_format": "text",
}

OUTPUT_FORMATS = ("text", "json")


def load_yaml(path: Optional[Path]) -> dict[str, Any]:
    """Safely load YAML configuration from ``path``.

    The function returns an empty dictionary when the file does not exist
    or is empty.
    """

    if not path or not path.exists():
        return {}

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot load config file {path}: {exc}") from exc

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")

    return dict(data)


def merge_dicts(*dicts: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge mappings with later dictionaries taking precedence."""

    merged: dict[str, Any] = {}

    for current in dicts:
        for key, value in current.items():
            if (
                key in merged
                and isinstance(merged[key], MutableMapping)
                and isinstance(value, Mapping)
            ):
                merged[key] = merge_dicts(merged[key], value)  # type: ignore[arg-type]
            else:
                merged[key] = value

    return merged


def _load_env_config(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Load configuration overrides from environment variables."""

    env_config: dict[str, Any] = {}
    prefix_len = len(prefix)

    for key, value in os.environ.items():
        if not key.startswith(prefix) or key == CONFIG_ENV_VAR:
            continue
        config_key = key[prefix_len:].lower()
        if config_key == "allowlist":
            env_config[config_key] = [
                item.strip() for item in value.split(",") if item.strip()
            ]
        else:
            env_config[config_key] = _coerce_env_value(value)

    return env_config


def _coerce_env_value(value: str) -> Any:
    """Attempt to cast environment variable values to richer types."""

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"

    if lowered.isdigit():
        try:
            return int(lowered)
        except ValueError:
            pass

    return value


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, str):
        value = _coerce_env_value(value.strip())
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}")
    return value


def _as_list(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value)
    raise ConfigurationError(f"Expected a list of identifiers, got {value!r}")


@dataclass(frozen=True)
class ScanConfig:
    """Strongly typed configuration representation."""

    log_level: str = DEFAULT_CONFIG["log_level"]
    signature_file: Optional[Path] = None
    allowlist: tuple[str, ...] = ()
    strict: bool = DEFAULT_CONFIG["strict"]
    color: bool = DEFAULT_CONFIG["color"]
    output_format: str = DEFAULT_CONFIG["output_format"]

    def as_dict(self) -> dict[str, Any]:
        return {
            "log_level": self.log_level,
            "signature_file": str(self.signature_file) if self.signature_file else None,
            "allowlist": list(self.allowlist),
            "strict": self.strict,
            "color": self.color,
            "output_format": self.output_format,
        }


def get_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ScanConfig:
    """Load scanner configuration.

    Args:
        config_file: Optional YAML configuration file.
        overrides: Explicit overrides that take highest precedence. ``None``
            values are ignored so unset CLI options do not mask other sources.

    Returns:
        A :class:`ScanConfig` instance.
    """

    config_file = _resolve_config_file(config_file)
    yaml_config = load_yaml(config_file)
    env_config = _load_env_config()
    explicit_overrides = {
        key: value for key, value in dict(overrides or {}).items() if value is not None
    }

    merged = merge_dicts(DEFAULT_CONFIG, yaml_config, env_config, explicit_overrides)

    output_format = str(merged["output_format"]).lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Unsupported output_format {output_format!r}; "
            f"expected one of {', '.join(OUTPUT_FORMATS)}"
        )

    signature_file = merged.get("signature_file")

    return ScanConfig(
        log_level=str(merged["log_level"]).upper(),
        signature_file=Path(signature_file).expanduser() if signature_file else None,
        allowlist=_as_list(merged.get("allowlist")),
        strict=_as_bool("strict", merged["strict"]),
        color=_as_bool("color", merged["color"]),
        output_format=output_format,
    )


def _resolve_config_file(config_file: Optional[Path]) -> Optional[Path]:
    """Determine the configuration file to use."""

    if config_file:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        return config_file

    env_file = os.environ.get(CONFIG_ENV_VAR)
    if env_file:
        candidate = Path(env_file).expanduser()
        if candidate.exists():
            return candidate

    return None


__all__ = [
    "DEFAULT_CONFIG",
    "ScanConfig",
    "get_config",
    "load_yaml",
    "merge_dicts",
]
