"""Adapters - infrastructure implementations of the domain ports."""

from presence_history.adapters.config import AppConfig

__all__ = ["AppConfig"]
