"""Active core-system lookup."""
from __future__ import annotations

from .manager import CoreSystemManager, CoreSystemProvider

__all__ = ["CoreSystemManager", "CoreSystemProvider"]
