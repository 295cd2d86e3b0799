"""Configuration loading from defaults, an optional YAML file, env vars, and CLI args."""

import logging
import os
from dataclasses import dataclass, fields, replace
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from gelf_pretty.errors import ConfigError
from gelf_pretty.record import ZERO_LEVEL_ALERT, ZERO_LEVEL_POLICIES

logger = logging.getLogger(__name__)

LOCAL_TIMEZONE = "local"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    color: bool = True
    timezone: str = LOCAL_TIMEZONE
    zero_level: str = ZERO_LEVEL_ALERT
    strict: bool = False
    log_level: str = "WARNING"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or no file."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def _from_yaml(base: Config, yaml_data: dict) -> Config:
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(yaml_data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    return replace(base, **{k: v for k, v in yaml_data.items() if k in known})


def _from_env(base: Config, environ) -> Config:
    overrides = {}
    if environ.get("NO_COLOR"):
        overrides["color"] = False
    if "GELF_PRETTY_TIMEZONE" in environ:
        overrides["timezone"] = environ["GELF_PRETTY_TIMEZONE"]
    if "GELF_PRETTY_ZERO_LEVEL" in environ:
        overrides["zero_level"] = environ["GELF_PRETTY_ZERO_LEVEL"]
    if "GELF_PRETTY_STRICT" in environ:
        overrides["strict"] = _env_flag(environ["GELF_PRETTY_STRICT"])
    if "GELF_PRETTY_LOG_LEVEL" in environ:
        overrides["log_level"] = environ["GELF_PRETTY_LOG_LEVEL"]
    return replace(base, **overrides)


def _from_cli(base: Config, cli_args) -> Config:
    overrides = {}
    if getattr(cli_args, "no_color", False):
        overrides["color"] = False
    if getattr(cli_args, "timezone", None):
        overrides["timezone"] = cli_args.timezone
    if getattr(cli_args, "zero_level", None):
        overrides["zero_level"] = cli_args.zero_level
    if getattr(cli_args, "strict", False):
        overrides["strict"] = True
    return replace(base, **overrides)


def validate_config(config: Config) -> Config:
    """Normalize and check values, raising ConfigError on anything unusable."""
    zero_level = str(config.zero_level).lower()
    if zero_level not in ZERO_LEVEL_POLICIES:
        raise ConfigError(
            f"zero_level must be one of {', '.join(ZERO_LEVEL_POLICIES)}, got {config.zero_level!r}"
        )
    log_level = str(config.log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {config.log_level!r}")
    if not isinstance(config.color, bool) or not isinstance(config.strict, bool):
        raise ConfigError("color and strict must be booleans")
    resolve_timezone(config.timezone)
    return replace(config, zero_level=zero_level, log_level=log_level)


def load_config(cli_args=None, yaml_data: dict | None = None, environ=None) -> Config:
    """Build Config from defaults, YAML data, env vars, and CLI args (later wins)."""
    environ = os.environ if environ is None else environ
    config = Config()
    config = _from_yaml(config, yaml_data or {})
    config = _from_env(config, environ)
    if cli_args is not None:
        config = _from_cli(config, cli_args)
    return validate_config(config)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Map a zone name to a tzinfo; 'local' (or empty) gives None, meaning the process zone."""
    if not name or str(name).lower() == LOCAL_TIMEZONE:
        return None
    if str(name).upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ConfigError(f"Unknown timezone: {name}") from exc
