"""
LCAgents configuration management (YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from lcagents.core.utils.io import read_yaml
from lcagents.core.utils.merge import deep_merge
from lcagents.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "LCAGENTS_"

# Project config lives inside the default root; paths.root only moves resources.
PROJECT_CONFIG_RELPATH = Path(".lcagents") / "config.yaml"


class ConfigManager:
    """Load and merge LCAgents configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: LCAGENTS_* (``__`` separates nested keys)
    2. Project config: <repo>/.lcagents/config.yaml
    3. Bundled defaults: lcagents.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root or Path.cwd()).resolve()
        self.core_config_dir = get_data_path("config")
        self.project_config_file = self.repo_root / PROJECT_CONFIG_RELPATH
        self._cache: Optional[Dict[str, Any]] = None

    # ========== Env override parsing ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            logger.warning("Ignoring malformed %s* key: %s%s", ENV_PREFIX, ENV_PREFIX, raw)
            return []
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX):])
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Any = root
        for part in path[:-1]:
            if not isinstance(cur.get(part), dict):
                cur[part] = {}
            cur = cur[part]
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Configuration never silently ignores invalid YAML.
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {path}")
        return data

    def _load_config_uncached(self) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        for path in sorted(Path(self.core_config_dir).glob("*.yaml")):
            cfg = deep_merge(cfg, self.load_yaml(path))

        if self.project_config_file.exists():
            cfg = deep_merge(cfg, self.load_yaml(self.project_config_file))

        self.apply_env_overrides(cfg)
        return cfg

    def load_config(self, *, refresh: bool = False) -> Dict[str, Any]:
        """Return the merged configuration (cached per manager instance)."""
        if self._cache is None or refresh:
            self._cache = self._load_config_uncached()
        return self._cache

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('paths.root')
            '.lcagents'
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Union[Dict[str, Any], Any] = self.load_config()
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    @property
    def lcagents_dir(self) -> Path:
        """Absolute path of the ``.lcagents`` root for this repository."""
        return self.repo_root / str(self.get("paths.root", ".lcagents"))


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_RELPATH"]
