"""
Layered configuration loading for snskills.

Layers, lowest priority first:

    defaults            Config() field defaults
    global              $SNSKILLS_HOME/config.yaml (~/.snskills/config.yaml)
    project             .snskills/project.yaml, nearest ancestor of the cwd
    environment         SNSKILLS_<SECTION>__<KEY>=<value>
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from snskills.config.merger import merge_configs, set_nested_value
from snskills.config.schema import Config
from snskills.storage.paths import find_project_config, get_global_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "SNSKILLS_"
ENV_NESTING_SEPARATOR = "__"

# Read directly by the CLI and path helpers, never treated as config keys
RESERVED_ENV_VARS = frozenset({"SNSKILLS_HOME", "SNSKILLS_ROOT"})


class ConfigurationError(Exception):
    """A config file is unreadable or the merged settings fail validation."""


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Read one YAML config layer.

    A missing or empty file is an empty layer.

    Raises:
        ConfigurationError: If the file is unreadable, not YAML, or not a mapping.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        layer = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if layer is None:
        return {}
    if not isinstance(layer, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a YAML mapping, got {type(layer).__name__}"
        )
    return layer


def _env_key_path(name: str) -> str | None:
    """Map SNSKILLS_SKILLS__MAX_WORKERS to "skills.max_workers"."""
    if not name.startswith(ENV_PREFIX) or name in RESERVED_ENV_VARS:
        return None

    parts = name[len(ENV_PREFIX) :].lower().split(ENV_NESTING_SEPARATOR)
    if not all(parts):
        return None
    return ".".join(parts)


def _parse_env_value(value: str) -> Any:
    """
    Type an environment value the way YAML would type a scalar.

    Comma-separated values become a list of strings. Anything YAML would
    read as a mapping, or cannot read at all, stays a plain string.
    """
    if "," in value:
        return [item.strip() for item in value.split(",")]

    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value

    if parsed is None or isinstance(parsed, dict):
        return value
    return parsed


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply SNSKILLS_* environment overrides to a config dict in place.

    A double underscore separates nesting levels so keys may keep single
    underscores: SNSKILLS_SKILLS__MAX_WORKERS=4 sets skills.max_workers.
    """
    for name, raw in os.environ.items():
        key_path = _env_key_path(name)
        if key_path is None:
            continue
        config = set_nested_value(config, key_path, _parse_env_value(raw))
        logger.debug(f"Config override from {name}: {key_path}")
    return config


def load_config(
    project_path: Path | None = None,
    skip_project: bool = False,
    skip_env: bool = False,
) -> Config:
    """
    Build the effective configuration from every layer.

    Args:
        project_path: Where to start looking for a project config (default cwd).
        skip_project: Ignore any project config.
        skip_env: Ignore SNSKILLS_* environment overrides.

    Returns:
        Validated Config.

    Raises:
        ConfigurationError: If a layer cannot be loaded or the result is invalid.
    """
    sources: list[Path] = [get_global_config_path()]
    if not skip_project:
        project_config = find_project_config(project_path)
        if project_config is not None:
            sources.append(project_config)

    layers = [Config().model_dump()]
    for source in sources:
        layer = load_yaml_file(source)
        if layer:
            logger.debug(f"Loaded config layer {source}")
        layers.append(layer)

    merged = merge_configs(*layers)
    if not skip_env:
        merged = apply_env_overrides(merged)

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


_config: Config | None = None


def get_config(reload: bool = False) -> Config:
    """Process-wide configuration, loaded once; reload=True re-reads every layer."""
    global _config

    if reload or _config is None:
        _config = load_config()
    return _config


def clear_config_cache() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None
