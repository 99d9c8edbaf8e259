"""Configuration loader that parses and validates user-provided TOML."""

from __future__ import annotations

import os
import tomllib
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Final, Optional

from .datatypes import AppConfig, CLIConfig, OutputConfig, RunnerConfig

CONFIG_ENV_VAR: Final[str] = "FRAMEMAKER_CONFIG"
DEFAULT_CONFIG_NAME: Final[str] = "framemaker.toml"


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or fails validation."""


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _coerce_int(value: Any, dotted_key: str) -> int:
    """Return an int, rejecting booleans and fractional values."""

    if isinstance(value, bool):
        raise ConfigError(f"{dotted_key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{dotted_key} must be an integer")


def _sanitize_section(raw: Any, name: str, cls):
    """
    Coerce a raw TOML table into an instance of ``cls``.

    Parameters:
        raw (Any): Raw TOML section data.
        name (str): Section name used when reporting validation errors.
        cls: Dataclass type used to construct the section object.

    Returns:
        Any: Instantiated dataclass populated with values from ``raw``.

    Raises:
        ConfigError: If the section is not a table or contains invalid keys or values.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"[{name}] must be a table")
    cleaned: Dict[str, Any] = {}
    cls_fields = {field.name: field for field in fields(cls)}
    for key, value in raw.items():
        field = cls_fields.get(key)
        if field is None:
            raise ConfigError(f"Invalid key in [{name}]: {key}")
        dotted = f"{name}.{key}"
        if field.type in (bool, "bool"):
            cleaned[key] = _coerce_bool(value, dotted)
        elif field.type in (int, "int"):
            cleaned[key] = _coerce_int(value, dotted)
        elif field.type in (str, "str"):
            if not isinstance(value, str):
                raise ConfigError(f"{dotted} must be a string")
            cleaned[key] = value
        elif is_dataclass(field.type):
            cleaned[key] = _sanitize_section(value, dotted, field.type)
        else:
            cleaned[key] = value
    try:
        return cls(**cleaned)
    except TypeError as exc:
        raise ConfigError(f"Invalid keys in [{name}]: {exc}") from exc


def _validate(app: AppConfig) -> None:
    if not app.output.directory.strip():
        raise ConfigError("output.directory must be set")
    if not app.output.suffix.strip():
        raise ConfigError("output.suffix must not be empty")
    if any(sep in app.output.suffix for sep in ("/", "\\")):
        raise ConfigError("output.suffix may not contain path separators")
    if app.output.compression_level not in (0, 1, 2):
        raise ConfigError("output.compression_level must be 0, 1 or 2")
    if app.runner.workers < 1:
        raise ConfigError("runner.workers must be >= 1")
    default_frame = app.runner.default_frame.strip().lower()
    if not default_frame:
        raise ConfigError("runner.default_frame must be set")
    app.runner.default_frame = default_frame


def load_config(path: str | Path) -> AppConfig:
    """
    Load and validate an application configuration from a TOML file.

    Reads the file at `path` as UTF-8 TOML (a BOM is accepted), coerces every
    known section and returns a fully populated AppConfig. Missing sections
    fall back to their defaults.

    Raises:
        ConfigError: If the file is not UTF-8, TOML parsing fails, or any validation rule is violated.
    """

    try:
        with open(path, "rb") as handle:
            raw_bytes = handle.read()
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{path}': {exc}") from exc
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        raw = tomllib.loads(raw_bytes.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigError("Configuration file must be UTF-8 encoded") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc

    known = {"output", "runner", "cli"}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {', '.join(unknown)}")

    app = AppConfig(
        output=_sanitize_section(raw.get("output", {}), "output", OutputConfig),
        runner=_sanitize_section(raw.get("runner", {}), "runner", RunnerConfig),
        cli=_sanitize_section(raw.get("cli", {}), "cli", CLIConfig),
    )
    _validate(app)
    return app


def resolve_config_path(explicit: Optional[str], *, cwd: Path | None = None) -> Optional[Path]:
    """Return the config file to load: explicit flag, then env var, then ./framemaker.toml."""

    if explicit:
        return Path(explicit)
    env_value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value)
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return candidate
    return None


def load_app_config(explicit: Optional[str] = None, *, cwd: Path | None = None) -> AppConfig:
    """Load the discovered configuration file, or defaults when none exists."""

    path = resolve_config_path(explicit, cwd=cwd)
    if path is None:
        return AppConfig()
    return load_config(path)
