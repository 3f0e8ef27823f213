"""
Filesystem locations used by snskills.

The home directory holds the user-wide config.yaml. A project may carry its
own settings in .snskills/project.yaml at or above the working directory.
"""

import os
from pathlib import Path

HOME_ENV_VAR = "SNSKILLS_HOME"
PROJECT_DIR_NAME = ".snskills"
PROJECT_CONFIG_NAME = "project.yaml"
GLOBAL_CONFIG_NAME = "config.yaml"


def get_snskills_home() -> Path:
    """
    Locate the snskills home directory.

    $SNSKILLS_HOME when set, otherwise ~/.snskills. The directory is not
    created here.
    """
    override = os.environ.get(HOME_ENV_VAR)
    if not override:
        return Path.home() / PROJECT_DIR_NAME
    return expand_path(override)


def get_global_config_path() -> Path:
    """Path of the user-wide config file (which may not exist)."""
    return get_snskills_home() / GLOBAL_CONFIG_NAME


def find_project_config(start_path: Path | None = None) -> Path | None:
    """
    Search upward for .snskills/project.yaml.

    Args:
        start_path: Directory to start from. Defaults to the working directory.

    Returns:
        The nearest project config, or None when no ancestor has one.
    """
    start = Path.cwd() if start_path is None else Path(start_path).resolve()

    candidates = (
        directory / PROJECT_DIR_NAME / PROJECT_CONFIG_NAME
        for directory in (start, *start.parents)
    )
    return next((candidate for candidate in candidates if candidate.is_file()), None)


def expand_path(path: str | Path) -> Path:
    """Expand $VARS and ~ in a path and make it absolute."""
    return Path(os.path.expandvars(os.fspath(path))).expanduser().resolve()
