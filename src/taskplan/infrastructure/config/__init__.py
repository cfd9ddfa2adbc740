"""User configuration store."""

from taskplan.infrastructure.config.config_loader import load_user_config

__all__ = ["load_user_config"]
