from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers.layout import write_agent, write_resource
from lcagents.cli._dispatcher import main


def _run_json(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, dict]:
    code = main([*argv, "--json"])
    out = capsys.readouterr()
    stream = out.out if code == 0 else out.err
    return code, json.loads(stream)


def test_res_list_json(isolated_project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_resource(isolated_project_env, "core", "templates", "prd.yaml")
    write_resource(isolated_project_env, "custom", "templates", "prd.yaml")

    code, payload = _run_json(capsys, "res", "list", "templates", "--repo-root", str(isolated_project_env))

    assert code == 0
    assert [(r["source"], r["name"]) for r in payload["resources"]] == [
        ("core", "prd.yaml"),
        ("custom", "prd.yaml"),
    ]


def test_res_delete_core_resource_fails(isolated_project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_resource(isolated_project_env, "core", "tasks", "create-doc.md")

    code, payload = _run_json(
        capsys, "res", "delete", "tasks", "create-doc.md", "--force", "--repo-root", str(isolated_project_env)
    )

    assert code == 1
    assert payload["error"]["code"] == "CoreResourceProtectedError"


def test_res_delete_and_restore(isolated_project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = str(isolated_project_env)
    path = write_resource(isolated_project_env, "custom", "tasks", "mine.md", "mine\n")
    write_agent(isolated_project_env, "dev", {"tasks": ["mine.md"]})

    code, payload = _run_json(capsys, "res", "check", "tasks", "mine.md", "--repo-root", root)
    assert code == 0
    assert payload["hasActive"] is True

    code, payload = _run_json(capsys, "res", "delete", "tasks", "mine.md", "--repo-root", root)
    assert code == 1
    assert payload["error"]["code"] == "DependenciesExistError"

    code, payload = _run_json(
        capsys, "res", "delete", "tasks", "mine.md", "--force", "--update-deps", "--repo-root", root
    )
    assert code == 0
    assert payload["updatedAgents"] == ["dev"]
    assert not path.exists()

    backup_name = Path(payload["backupPath"]).name
    code, payload = _run_json(capsys, "res", "backups", "--repo-root", root)
    assert payload["backups"] == [backup_name]

    code, payload = _run_json(capsys, "res", "restore", backup_name, "--repo-root", root)
    assert code == 0
    assert path.read_text(encoding="utf-8") == "mine\n"


def test_agents_resolve_text_output(isolated_project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_agent(isolated_project_env, "dev", {})

    code = main(["agents", "resolve", "dev", "--repo-root", str(isolated_project_env)])

    assert code == 0
    assert "dev:" in capsys.readouterr().out


def test_layers_init_creates_structure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["layers", "init", "--repo-root", str(tmp_path)])

    assert code == 0
    assert (tmp_path / ".lcagents" / "custom" / "templates" / "overrides").is_dir()
