"""Records exchanged by the dependency checker, backup store and safe delete."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

DependencyKind = Literal["agent", "resource"]


@dataclass(frozen=True)
class ResourceDependency:
    """An agent or resource that references a target resource by name."""

    type: DependencyKind
    name: str
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "name": self.name, "path": self.path}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResourceDependency":
        return cls(type=data["type"], name=str(data["name"]), path=str(data["path"]))


@dataclass(frozen=True)
class DependencyCheckResult:
    dependencies: List[ResourceDependency] = field(default_factory=list)
    is_core: bool = False

    @property
    def has_active(self) -> bool:
        return bool(self.dependencies)

    @property
    def agent_dependents(self) -> List[ResourceDependency]:
        return [d for d in self.dependencies if d.type == "agent"]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasActive": self.has_active,
            "dependencies": [d.to_dict() for d in self.dependencies],
            "isCore": self.is_core,
        }


@dataclass(frozen=True)
class BackupMetadata:
    """Persisted as ``metadata.json`` inside each backup directory."""

    timestamp: str
    resource_name: str
    resource_type: str
    dependencies: List[ResourceDependency]
    original_path: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "resourceName": self.resource_name,
            "resourceType": self.resource_type,
            "dependencies": [d.to_dict() for d in self.dependencies],
            "originalPath": self.original_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BackupMetadata":
        return cls(
            timestamp=str(data["timestamp"]),
            resource_name=str(data["resourceName"]),
            resource_type=str(data["resourceType"]),
            dependencies=[ResourceDependency.from_dict(d) for d in data.get("dependencies", [])],
            original_path=str(data["originalPath"]),
        )


@dataclass(frozen=True)
class DeleteOptions:
    force: bool = False
    update_deps: bool = False
    skip_backup: bool = False


@dataclass
class DeleteResult:
    resource_name: str
    resource_type: str
    path: Path
    backup_path: Optional[Path] = None
    updated_agents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceName": self.resource_name,
            "resourceType": self.resource_type,
            "path": str(self.path),
            "backupPath": str(self.backup_path) if self.backup_path else None,
            "updatedAgents": list(self.updated_agents),
        }


__all__ = [
    "DependencyKind",
    "ResourceDependency",
    "DependencyCheckResult",
    "BackupMetadata",
    "DeleteOptions",
    "DeleteResult",
]
