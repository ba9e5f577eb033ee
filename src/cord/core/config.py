"""
Configuration for cord.

Settings come from the ``[cord]`` table of a ``cord.toml`` file, then from
``CORD_*`` environment variables, which win over the file:

    [cord]
    max_depth = 64          # deepest bracket / unary nesting
    allow_trailing = false  # ignore tokens after a complete expression
    log_level = "WARNING"
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from cord.core.errors import ConfigError

DEFAULT_CONFIG_FILE = "cord.toml"
DEFAULT_MAX_DEPTH = 64
# Each nesting level costs several parser frames; stay under the recursion limit
MAX_DEPTH_LIMIT = 128

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class CordConfig:
    """Evaluation settings."""

    max_depth: int = DEFAULT_MAX_DEPTH
    allow_trailing: bool = False
    log_level: str = "WARNING"


def load_config(path: Path | None = None) -> CordConfig:
    """Load configuration from a TOML file and the environment.

    Args:
        path: Explicit config file. When omitted, ``cord.toml`` in the
            current directory is used if it exists.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: If the file is missing (when given explicitly), is not
            valid TOML, or holds an invalid value.
    """
    config = CordConfig()

    if path is None:
        default = Path.cwd() / DEFAULT_CONFIG_FILE
        if default.exists():
            path = default
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    if path is not None:
        config = _apply_file(config, path)

    return _apply_env(config)


def _apply_file(config: CordConfig, path: Path) -> CordConfig:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    table = data.get("cord", {})
    if not isinstance(table, dict):
        raise ConfigError(f"[cord] in {path} must be a table")
    unknown = set(table) - {"max_depth", "allow_trailing", "log_level"}
    if unknown:
        raise ConfigError(f"Unknown keys in [cord] of {path}: {', '.join(sorted(unknown))}")

    if "max_depth" in table:
        config = replace(config, max_depth=_check_depth(table["max_depth"]))
    if "allow_trailing" in table:
        if not isinstance(table["allow_trailing"], bool):
            raise ConfigError("allow_trailing must be true or false")
        config = replace(config, allow_trailing=table["allow_trailing"])
    if "log_level" in table:
        config = replace(config, log_level=_check_level(table["log_level"]))
    return config


def _apply_env(config: CordConfig) -> CordConfig:
    if raw := os.environ.get("CORD_MAX_DEPTH"):
        try:
            depth = int(raw)
        except ValueError as e:
            raise ConfigError(f"CORD_MAX_DEPTH must be an integer, got {raw!r}") from e
        config = replace(config, max_depth=_check_depth(depth))

    if raw := os.environ.get("CORD_ALLOW_TRAILING"):
        if raw.lower() in _TRUE:
            config = replace(config, allow_trailing=True)
        elif raw.lower() in _FALSE:
            config = replace(config, allow_trailing=False)
        else:
            raise ConfigError(f"CORD_ALLOW_TRAILING must be a boolean, got {raw!r}")

    if raw := os.environ.get("CORD_LOG_LEVEL"):
        config = replace(config, log_level=_check_level(raw))

    return config


def _check_depth(value: object) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ConfigError(f"max_depth must be a positive integer, got {value!r}")
    if value > MAX_DEPTH_LIMIT:
        raise ConfigError(f"max_depth must be at most {MAX_DEPTH_LIMIT}, got {value}")
    return value


def _check_level(value: object) -> str:
    level = str(value).upper()
    if level not in logging.getLevelNamesMapping():
        raise ConfigError(f"Unknown log level: {value!r}")
    return level
