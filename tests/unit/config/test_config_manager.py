from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from helpers.layout import write_project_config
from lcagents.core.config import ConfigManager
from lcagents.core.coresystem import CoreSystemManager


def test_bundled_defaults_without_project_config(tmp_path: Path) -> None:
    cfg = ConfigManager(tmp_path)

    assert cfg.get("paths.root") == ".lcagents"
    assert cfg.get("backups.dir") == "backups"
    assert cfg.get("agents.extension") == ".md"
    assert cfg.get("core.active") is None
    assert cfg.get("does.not.exist", "fallback") == "fallback"
    assert cfg.lcagents_dir == tmp_path.resolve() / ".lcagents"


def test_project_config_overrides_defaults(tmp_path: Path) -> None:
    write_project_config(tmp_path, active="bmad-core", extra={"backups": {"dir": "snapshots"}})

    cfg = ConfigManager(tmp_path)

    assert cfg.get("core.active") == "bmad-core"
    assert cfg.get("backups.dir") == "snapshots"
    # Untouched defaults survive the merge
    assert cfg.get("agents.override_extension") == ".yaml"


def test_env_overrides_win_and_are_coerced(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_project_config(tmp_path, active="bmad-core")
    monkeypatch.setenv("LCAGENTS_CORE__ACTIVE", "other-core")
    monkeypatch.setenv("LCAGENTS_LAYERS__SCAFFOLD_TYPES", '["agents", "tasks"]')
    monkeypatch.setenv("LCAGENTS_EXTRA__ENABLED", "true")
    monkeypatch.setenv("LCAGENTS_EXTRA__RETRIES", "3")
    monkeypatch.setenv("LCAGENTS_BROKEN____KEY", "ignored")

    cfg = ConfigManager(tmp_path)

    assert cfg.get("core.active") == "other-core"
    assert cfg.get("layers.scaffold_types") == ["agents", "tasks"]
    assert cfg.get("extra.enabled") is True
    assert cfg.get("extra.retries") == 3
    assert cfg.get("broken") is None


def test_invalid_project_yaml_fails_closed(tmp_path: Path) -> None:
    path = tmp_path / ".lcagents" / "config.yaml"
    path.parent.mkdir(parents=True)
    path.write_text("core: [unclosed\n", encoding="utf-8")

    with pytest.raises(yaml.YAMLError):
        ConfigManager(tmp_path).load_config()


def test_core_system_manager_reads_active_system(tmp_path: Path) -> None:
    write_project_config(tmp_path, active="bmad-core")
    manager = CoreSystemManager(tmp_path)

    assert manager.get_active_core_system() == "bmad-core"
    assert manager.get_active_core_config() == {"name": "bmad-core", "version": "4.36.2"}


def test_core_system_manager_without_active_system(tmp_path: Path) -> None:
    write_project_config(tmp_path, active=None)
    manager = CoreSystemManager(tmp_path)

    assert manager.get_active_core_system() is None
    assert manager.get_active_core_config() is None
