"""Storage utilities for snskills."""

from snskills.storage.paths import (
    expand_path,
    find_project_config,
    get_global_config_path,
    get_snskills_home,
)

__all__ = [
    "expand_path",
    "find_project_config",
    "get_global_config_path",
    "get_snskills_home",
]
