from __future__ import annotations

from pathlib import Path

import pytest

import lcagents.core.deletion.safe_delete as safe_delete_module
from helpers.fakes import FakeCoreSystem
from helpers.layout import core_dir, write_agent, write_resource
from lcagents.core.deletion import DeleteOptions, SafeDeleteManager
from lcagents.core.exceptions import (
    CoreResourceProtectedError,
    CoreSystemNotConfiguredError,
    DependenciesExistError,
    InvalidArgumentError,
    ResourceNotFoundError,
)
from lcagents.core.layers import LayerManager


@pytest.fixture
def manager(isolated_project_env: Path) -> SafeDeleteManager:
    return SafeDeleteManager(isolated_project_env)


def test_requires_active_core_configuration(isolated_project_env: Path) -> None:
    with pytest.raises(CoreSystemNotConfiguredError):
        SafeDeleteManager(isolated_project_env, core_system=FakeCoreSystem(active=None))


def test_init_creates_backups_directory(isolated_project_env: Path, manager: SafeDeleteManager) -> None:
    assert (isolated_project_env / ".lcagents" / "backups").is_dir()
    assert manager.core_config["name"] == "bmad-core"
    assert manager.core_config["version"] == "4.36.2"


@pytest.mark.parametrize(
    "options",
    [
        DeleteOptions(),
        DeleteOptions(force=True),
        DeleteOptions(skip_backup=True),
        DeleteOptions(force=True, update_deps=True, skip_backup=True),
    ],
)
def test_core_resources_are_never_deleted(
    isolated_project_env: Path, manager: SafeDeleteManager, options: DeleteOptions
) -> None:
    path = write_resource(isolated_project_env, "core", "tasks", "create-doc.md", "core\n")

    with pytest.raises(CoreResourceProtectedError):
        manager.safe_delete("create-doc.md", "tasks", options)

    assert path.read_text(encoding="utf-8") == "core\n"
    assert manager.list_backups() == []


def test_dependents_block_deletion_until_forced(isolated_project_env: Path, manager: SafeDeleteManager) -> None:
    root = isolated_project_env
    path = write_resource(root, "custom", "templates", "prd.yaml")
    write_agent(root, "pm", {"templates": ["prd.yaml"]})

    with pytest.raises(DependenciesExistError) as excinfo:
        manager.safe_delete("prd.yaml", "templates", DeleteOptions())

    assert [(d.type, d.name) for d in excinfo.value.dependencies] == [("agent", "pm")]
    assert excinfo.value.context["dependencies"][0]["name"] == "pm"
    assert path.exists()
    assert manager.list_backups() == []

    result = manager.safe_delete("prd.yaml", "templates", DeleteOptions(force=True))

    assert not path.exists()
    assert result.backup_path is not None
    assert result.updated_agents == []


def test_delete_then_restore_round_trip(isolated_project_env: Path, manager: SafeDeleteManager) -> None:
    path = write_resource(isolated_project_env, "org", "checklists", "dod.md", "- [ ] done\n")
    before = path.read_bytes()

    result = manager.safe_delete("dod.md", "checklists")

    assert not path.exists()
    assert result.path == path
    assert (result.backup_path / "dod.md").read_bytes() == before
    assert (result.backup_path / "metadata.json").is_file()

    restored = manager.restore(result.backup_path.name)

    assert restored == path
    assert path.read_bytes() == before


def test_deleting_custom_override_reveals_core_copy(isolated_project_env: Path, manager: SafeDeleteManager) -> None:
    root = isolated_project_env
    write_resource(root, "core", "templates", "story.yaml", "core\n")
    write_resource(root, "custom", "templates", "story.yaml", "custom\n")

    manager.safe_delete("story.yaml", "templates")

    hit = manager.layers.resolve_template("story.yaml")
    assert hit.path == core_dir(root, "templates") / "story.yaml"
    assert hit.path.read_text(encoding="utf-8") == "core\n"


def test_mutation_failure_rolls_back_and_reraises(
    isolated_project_env: Path, manager: SafeDeleteManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = write_resource(isolated_project_env, "custom", "utils", "helper.md", "original\n")
    real_remove = safe_delete_module.remove_path

    def _remove_then_fail(target: Path) -> None:
        real_remove(target)
        raise OSError("disk went away")

    monkeypatch.setattr(safe_delete_module, "remove_path", _remove_then_fail)

    with pytest.raises(OSError, match="disk went away"):
        manager.safe_delete("helper.md", "utils")

    assert path.read_text(encoding="utf-8") == "original\n"


def test_post_update_failure_rolls_back(
    isolated_project_env: Path, manager: SafeDeleteManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = isolated_project_env
    path = write_resource(root, "custom", "tasks", "shared.md", "shared\n")
    write_agent(root, "dev", {"tasks": ["shared.md"]})

    def _fail_save(agent) -> None:
        raise PermissionError("read-only agent")

    monkeypatch.setattr(manager.layers, "save_agent", _fail_save)

    with pytest.raises(PermissionError):
        manager.safe_delete("shared.md", "tasks", DeleteOptions(force=True, update_deps=True))

    assert path.read_text(encoding="utf-8") == "shared\n"


def test_failure_without_backup_is_not_recovered(
    isolated_project_env: Path, manager: SafeDeleteManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = write_resource(isolated_project_env, "custom", "utils", "helper.md")
    real_remove = safe_delete_module.remove_path

    def _remove_then_fail(target: Path) -> None:
        real_remove(target)
        raise OSError("boom")

    monkeypatch.setattr(safe_delete_module, "remove_path", _remove_then_fail)

    with pytest.raises(OSError, match="boom"):
        manager.safe_delete("helper.md", "utils", DeleteOptions(skip_backup=True))

    assert not path.exists()
    assert manager.list_backups() == []


def test_update_deps_rewrites_dependent_agents(isolated_project_env: Path, manager: SafeDeleteManager) -> None:
    root = isolated_project_env
    write_resource(root, "custom", "tasks", "obsolete.md")
    write_agent(root, "dev", {"tasks": ["obsolete.md", "develop.md"], "data": ["obsolete.md"]})
    write_agent(root, "qa", {"tasks": ["review.md"]})
    qa_before = (core_dir(root, "agents") / "qa.md").read_text(encoding="utf-8")

    result = manager.safe_delete("obsolete.md", "tasks", DeleteOptions(force=True, update_deps=True))

    assert result.updated_agents == ["dev"]
    dev = LayerManager(root).load_agent("dev")
    assert dev.dependencies == {"tasks": ["develop.md"], "data": []}
    assert (core_dir(root, "agents") / "qa.md").read_text(encoding="utf-8") == qa_before


def test_missing_resource_is_reported(manager: SafeDeleteManager) -> None:
    with pytest.raises(ResourceNotFoundError):
        manager.safe_delete("ghost.md", "tasks")


def test_restore_unknown_backup_name(manager: SafeDeleteManager) -> None:
    with pytest.raises(ResourceNotFoundError):
        manager.restore("nope-2024-01-01T00-00-00-000Z")


def test_resource_named_like_backup_metadata_is_not_deleted(
    isolated_project_env: Path, manager: SafeDeleteManager
) -> None:
    path = write_resource(isolated_project_env, "custom", "data", "metadata.json", '{"user": "payload"}\n')

    with pytest.raises(InvalidArgumentError):
        manager.safe_delete("metadata.json", "data")

    assert path.read_text(encoding="utf-8") == '{"user": "payload"}\n'
    assert manager.list_backups() == []


def test_update_deps_leaves_resource_dependents_untouched(
    isolated_project_env: Path, manager: SafeDeleteManager
) -> None:
    root = isolated_project_env
    write_resource(root, "custom", "tasks", "obsolete.md")
    user = write_resource(root, "org", "tasks", "user.md", "---\ndependencies: [obsolete.md]\n---\n\n# User\n")
    write_agent(root, "dev", {"tasks": ["obsolete.md"]})
    before = user.read_text(encoding="utf-8")

    result = manager.safe_delete("obsolete.md", "tasks", DeleteOptions(force=True, update_deps=True))

    assert result.updated_agents == ["dev"]
    assert user.read_text(encoding="utf-8") == before


def test_update_deps_keeps_body_spacing_of_frontmatter_agents(
    isolated_project_env: Path, manager: SafeDeleteManager
) -> None:
    root = isolated_project_env
    write_resource(root, "custom", "tasks", "x.md")
    agent = write_resource(
        root, "core", "agents", "dev.md", "---\ndependencies:\n  tasks:\n  - x.md\n  - y.md\n---\n\n# Dev\n"
    )

    manager.safe_delete("x.md", "tasks", DeleteOptions(force=True, update_deps=True))

    assert agent.read_text(encoding="utf-8") == "---\ndependencies:\n  tasks:\n  - y.md\n---\n\n# Dev\n"
