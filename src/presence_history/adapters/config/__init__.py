"""Configuration adapters."""

from presence_history.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
