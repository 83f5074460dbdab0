"""Dependency checking, backups and safe deletion of layered resources."""
from __future__ import annotations

from .backup import BackupStore
from .dependencies import DependencyChecker
from .model import (
    BackupMetadata,
    DeleteOptions,
    DeleteResult,
    DependencyCheckResult,
    ResourceDependency,
)
from .safe_delete import SafeDeleteManager

__all__ = [
    "BackupMetadata",
    "BackupStore",
    "DeleteOptions",
    "DeleteResult",
    "DependencyCheckResult",
    "DependencyChecker",
    "ResourceDependency",
    "SafeDeleteManager",
]
