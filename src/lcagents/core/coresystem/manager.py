"""Read-only access to the active core system.

Layer resolution depends only on :class:`CoreSystemProvider`, so tests and
embedding tools can pass any object with these two queries.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from lcagents.core.config import ConfigManager


class CoreSystemProvider(Protocol):
    """Supplies the active core system identifier and its configuration."""

    def get_active_core_system(self) -> Optional[str]: ...

    def get_active_core_config(self) -> Optional[Dict[str, Any]]: ...


class CoreSystemManager:
    """Config-backed :class:`CoreSystemProvider`.

    Reads ``core.active`` for the identifier and ``core.systems.<id>`` for
    its configuration, e.g.::

        core:
          active: bmad-core
          systems:
            bmad-core:
              version: 4.36.2
    """

    def __init__(self, repo_root: Optional[Path] = None, *, config: Optional[ConfigManager] = None) -> None:
        self._config = config or ConfigManager(repo_root)

    def get_active_core_system(self) -> Optional[str]:
        active = self._config.get("core.active")
        if active is None:
            return None
        active = str(active).strip()
        return active or None

    def get_active_core_config(self) -> Optional[Dict[str, Any]]:
        active = self.get_active_core_system()
        if not active:
            return None
        systems = self._config.get("core.systems", {}) or {}
        system_cfg = systems.get(active) if isinstance(systems, dict) else None
        cfg: Dict[str, Any] = {"name": active}
        if isinstance(system_cfg, dict):
            cfg.update(system_cfg)
        return cfg


__all__ = ["CoreSystemManager", "CoreSystemProvider"]
