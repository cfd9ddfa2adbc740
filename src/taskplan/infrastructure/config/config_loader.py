"""
User Configuration Store

Reads the user's YAML configuration file. The core only needs the nested
mapping; writing values back is left to the interactive collaborator.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml

from taskplan.core.domain.errors import ConfigCorruptionError, FileReadError
from taskplan.core.utils.paths import get_config_path

logger = structlog.get_logger(__name__)


def load_user_config(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the nested user configuration.

    Args:
        path: YAML file; defaults to the per-user config file

    Returns:
        Parsed mapping, or an empty dict when the file does not exist

    Raises:
        FileReadError: The file exists but cannot be read
        ConfigCorruptionError: The file is not valid YAML or not a mapping
    """
    config_path = Path(path).expanduser() if path else get_config_path()

    if not config_path.exists():
        logger.debug("config.not_found", config_file=str(config_path))
        return {}

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(
            f"Cannot read configuration file {config_path}", path=str(config_path), cause=e
        ) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigCorruptionError(
            f"Configuration file {config_path} is not valid YAML",
            path=str(config_path),
            cause=e,
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigCorruptionError(
            f"Configuration file {config_path} must contain a mapping",
            path=str(config_path),
        )

    logger.debug("config.loaded", config_file=str(config_path), keys=len(data))
    return data
