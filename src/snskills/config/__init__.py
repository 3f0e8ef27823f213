"""Configuration system for snskills."""

from snskills.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    clear_config_cache,
    get_config,
    load_config,
    load_yaml_file,
)
from snskills.config.merger import deep_merge, merge_configs, set_nested_value
from snskills.config.schema import Config, LoggingConfig, SkillsConfig, ValidationConfig

__all__ = [
    "Config",
    "ConfigurationError",
    "LoggingConfig",
    "SkillsConfig",
    "ValidationConfig",
    "apply_env_overrides",
    "clear_config_cache",
    "deep_merge",
    "get_config",
    "load_config",
    "load_yaml_file",
    "merge_configs",
    "set_nested_value",
]
