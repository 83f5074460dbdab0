"""Timestamped snapshots of resources taken before deletion.

Layout::

    .lcagents/backups/<resourceName>-<timestamp>/
        <original-basename>
        metadata.json

Backups are never pruned here; retention is left to the user.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from lcagents.core.exceptions import (
    InvalidArgumentError,
    InvalidBackupError,
    ResourceNotFoundError,
    StaleLocationError,
)
from lcagents.core.layers import LayerManager, ResourceType
from lcagents.core.schemas import SchemaValidationError, validate_payload
from lcagents.core.utils.io import copy_path, ensure_directory, read_json, write_json_atomic
from lcagents.core.utils.time import filesystem_timestamp

from .model import BackupMetadata, ResourceDependency

logger = logging.getLogger(__name__)

METADATA_FILENAME = "metadata.json"
METADATA_SCHEMA = "backup-metadata"


class BackupStore:
    def __init__(self, layers: LayerManager, backups_dir: Optional[Path] = None) -> None:
        self.layers = layers
        if backups_dir is None:
            backups_dir = layers.lcagents_path / str(layers.config.get("backups.dir", "backups"))
        self.backups_dir = Path(backups_dir)

    def ensure_backups_dir(self) -> Path:
        return ensure_directory(self.backups_dir)

    def _allocate_backup_dir(self, resource_name: str, timestamp: str) -> Path:
        candidate = self.backups_dir / f"{resource_name}-{timestamp}"
        suffix = 1
        while candidate.exists():
            candidate = self.backups_dir / f"{resource_name}-{timestamp}-{suffix}"
            suffix += 1
        return candidate

    def create_backup(
        self,
        resource_name: str,
        resource_type: ResourceType | str,
        dependencies: Sequence[ResourceDependency] = (),
    ) -> Path:
        """Copy the resource and its metadata into a new backup directory.

        Raises:
            ResourceNotFoundError: If the resource does not currently exist
            InvalidArgumentError: If the resource is named like the metadata file
        """
        rtype = ResourceType.parse(resource_type)
        original_path = self.layers.get_resource_path(rtype, resource_name)
        if original_path is None:
            raise ResourceNotFoundError(
                f"Resource not found: {resource_name}",
                context={"resourceName": resource_name, "resourceType": rtype.value},
            )

        if original_path.name == METADATA_FILENAME:
            raise InvalidArgumentError(
                f"Cannot back up a resource named {METADATA_FILENAME}: it collides with the backup metadata file",
                context={"resourceName": resource_name, "resourceType": rtype.value},
            )

        timestamp = filesystem_timestamp()
        backup_path = self._allocate_backup_dir(resource_name, timestamp)
        metadata = BackupMetadata(
            timestamp=timestamp,
            resource_name=resource_name,
            resource_type=rtype.value,
            dependencies=list(dependencies),
            original_path=str(original_path),
        )

        ensure_directory(backup_path)
        copy_path(original_path, backup_path / original_path.name)
        write_json_atomic(backup_path / METADATA_FILENAME, metadata.to_dict())
        logger.info("Backed up %s/%s to %s", rtype.value, resource_name, backup_path)
        return backup_path

    def read_metadata(self, backup_path: Path | str) -> BackupMetadata:
        """Load and validate ``metadata.json``.

        Raises:
            InvalidBackupError: If metadata is missing, not JSON, or malformed
        """
        metadata_path = Path(backup_path) / METADATA_FILENAME
        if not metadata_path.is_file():
            raise InvalidBackupError(
                "Invalid backup: metadata not found",
                context={"backupPath": str(backup_path)},
            )
        try:
            data = read_json(metadata_path)
            validate_payload(data, METADATA_SCHEMA)
        except (json.JSONDecodeError, UnicodeDecodeError, SchemaValidationError) as exc:
            raise InvalidBackupError(
                f"Invalid backup: unreadable metadata ({exc})",
                context={"backupPath": str(backup_path)},
            ) from exc
        return BackupMetadata.from_dict(data)

    def restore_backup(self, backup_path: Path | str) -> Path:
        """Copy the backed-up resource back to its original path.

        Whatever currently sits at the original path is replaced.

        Raises:
            InvalidBackupError: If metadata is missing or invalid
            StaleLocationError: If the original parent directory no longer exists
        """
        backup_path = Path(backup_path)
        metadata = self.read_metadata(backup_path)
        original_path = Path(metadata.original_path)

        if not original_path.parent.is_dir():
            raise StaleLocationError(
                "Original resource location no longer exists",
                context={"originalPath": str(original_path), "backupPath": str(backup_path)},
            )

        backup_copy = backup_path / original_path.name
        if not backup_copy.exists():
            raise InvalidBackupError(
                f"Invalid backup: {backup_copy.name} is missing",
                context={"backupPath": str(backup_path)},
            )

        copy_path(backup_copy, original_path)
        logger.info("Restored %s from %s", original_path, backup_path)
        return original_path

    def resolve_backup(self, backup_name: str) -> Path:
        name = str(backup_name or "").strip()
        backup_path = self.backups_dir / name
        if not name or "/" in name or "\\" in name or name in {".", ".."} or not backup_path.is_dir():
            raise ResourceNotFoundError(
                f"Backup not found: {backup_name}",
                context={"backup": str(backup_name), "available": self.list_backups()},
            )
        return backup_path

    def list_backups(self) -> List[str]:
        if not self.backups_dir.is_dir():
            return []
        return sorted(p.name for p in self.backups_dir.iterdir() if p.is_dir())


__all__ = ["BackupStore", "METADATA_FILENAME"]
