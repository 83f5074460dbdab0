"""Safe deletion of layered resources.

Each ``safe_delete`` call runs, strictly in order:

1. check     – dependents and core ownership
2. gate      – refuse when dependents exist and ``force`` is off
3. backup    – unless ``skip_backup``
4. mutate    – remove the file or directory
5. post-update – optionally drop the name from dependent agents

A failure in steps 4-5 restores the backup (when one was taken) and the
original error is re-raised.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from lcagents.core.config import ConfigManager
from lcagents.core.coresystem import CoreSystemManager, CoreSystemProvider
from lcagents.core.exceptions import (
    CoreResourceProtectedError,
    CoreSystemNotConfiguredError,
    DependenciesExistError,
    ResourceNotFoundError,
)
from lcagents.core.layers import LayerManager, ResourceType
from lcagents.core.utils.io import remove_path

from .backup import BackupStore
from .dependencies import DependencyChecker
from .model import DeleteOptions, DeleteResult, DependencyCheckResult, ResourceDependency

logger = logging.getLogger(__name__)


class SafeDeleteManager:
    """Delete and restore resources while protecting the core layer.

    Example:
        manager = SafeDeleteManager(project_root)
        manager.safe_delete("old-template.yaml", "templates", DeleteOptions(force=True))
    """

    def __init__(
        self,
        base_path: Path,
        *,
        core_system: Optional[CoreSystemProvider] = None,
        config: Optional[ConfigManager] = None,
        layers: Optional[LayerManager] = None,
    ) -> None:
        self.base_path = Path(base_path).resolve()
        if layers is None:
            config = config or ConfigManager(self.base_path)
            core_system = core_system or CoreSystemManager(config=config)
            layers = LayerManager(self.base_path, core_system=core_system, config=config)
        self.layers = layers

        active_config = self.layers.core_system.get_active_core_config()
        if not active_config:
            raise CoreSystemNotConfiguredError("No active core configuration found")
        self.core_config = dict(active_config)

        self.checker = DependencyChecker(self.layers)
        self.backups = BackupStore(self.layers)
        self.backups.ensure_backups_dir()

    def check_dependencies(
        self, resource_name: str, resource_type: ResourceType | str
    ) -> DependencyCheckResult:
        return self.checker.check_dependencies(resource_name, resource_type)

    def safe_delete(
        self,
        resource_name: str,
        resource_type: ResourceType | str,
        options: Optional[DeleteOptions] = None,
    ) -> DeleteResult:
        """Delete a non-core resource with dependency gating, backup and rollback.

        Raises:
            ResourceNotFoundError: If the resource does not exist
            CoreResourceProtectedError: Always for core-layer resources
            DependenciesExistError: If dependents exist and ``force`` is off
        """
        opts = options or DeleteOptions()
        rtype = ResourceType.parse(resource_type)

        check = self.checker.check_dependencies(resource_name, rtype)

        if check.is_core:
            raise CoreResourceProtectedError(
                "Cannot delete core system resources. These resources are immutable.",
                context={"resourceName": resource_name, "resourceType": rtype.value},
            )

        if check.has_active and not opts.force:
            dep_list = ", ".join(f"{d.type} {d.name}" for d in check.dependencies)
            raise DependenciesExistError(
                f"Resource has active dependencies: {dep_list}. Use --force to override.",
                dependencies=check.dependencies,
                context={"resourceName": resource_name, "resourceType": rtype.value},
            )

        backup_path: Optional[Path] = None
        if not opts.skip_backup:
            backup_path = self.backups.create_backup(resource_name, rtype, check.dependencies)
        else:
            logger.warning("Deleting %s/%s without a backup", rtype.value, resource_name)

        try:
            resource_path = self.layers.get_resource_path(rtype, resource_name)
            if resource_path is None:
                raise ResourceNotFoundError(
                    f"Resource not found: {resource_name}",
                    context={"resourceName": resource_name, "resourceType": rtype.value},
                )

            remove_path(resource_path)
            logger.info("Deleted %s/%s at %s", rtype.value, resource_name, resource_path)

            updated: List[str] = []
            if opts.update_deps:
                updated = self._update_dependencies(resource_name, check.agent_dependents)
        except Exception as exc:
            if backup_path is not None:
                self._rollback(backup_path, exc)
            raise

        return DeleteResult(
            resource_name=resource_name,
            resource_type=rtype.value,
            path=resource_path,
            backup_path=backup_path,
            updated_agents=updated,
        )

    def _rollback(self, backup_path: Path, cause: BaseException) -> None:
        logger.warning("Delete failed (%s); restoring from %s", cause, backup_path)
        try:
            self.backups.restore_backup(backup_path)
        except Exception as restore_exc:
            # The original error is what the caller must see.
            logger.error("Rollback from %s failed: %s", backup_path, restore_exc)

    def _update_dependencies(
        self, resource_name: str, agent_dependents: List[ResourceDependency]
    ) -> List[str]:
        """Remove ``resource_name`` from every dependent agent and save it."""
        updated: List[str] = []
        for dep in agent_dependents:
            agent = self.layers.load_agent(dep.name)
            if agent.remove_dependency(resource_name):
                self.layers.save_agent(agent)
                updated.append(agent.name)
                logger.info("Removed %s from agent %s dependencies", resource_name, agent.name)
        return updated

    def restore_backup(self, backup_path: Path | str) -> Path:
        return self.backups.restore_backup(backup_path)

    def restore(self, backup_name: str) -> Path:
        """Restore a backup by its directory name under the backups root."""
        return self.backups.restore_backup(self.backups.resolve_backup(backup_name))

    def list_backups(self) -> List[str]:
        return self.backups.list_backups()


__all__ = ["SafeDeleteManager"]
