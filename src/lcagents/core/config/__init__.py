"""Configuration loading for LCAgents."""
from __future__ import annotations

from .manager import ConfigManager, ENV_PREFIX

__all__ = ["ConfigManager", "ENV_PREFIX"]
