"""
Path utilities for the per-user taskplan directory.

The home directory defaults to ``~/.taskplan`` and can be moved with the
``TASKPLAN_HOME`` environment variable.
"""

import os
from pathlib import Path

HOME_ENV_VAR = "TASKPLAN_HOME"
SKILLS_DIR_NAME = "skills"
CONFIG_FILE_NAME = "config.yaml"


def get_taskplan_home() -> Path:
    """Root directory holding user skills and configuration."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".taskplan"


def get_skills_directory() -> Path:
    return get_taskplan_home() / SKILLS_DIR_NAME


def get_config_path() -> Path:
    return get_taskplan_home() / CONFIG_FILE_NAME
