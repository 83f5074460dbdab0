"""Resource metadata lookup."""
from __future__ import annotations

from .metadata import ResourceMetadata, read_resource_metadata

__all__ = ["ResourceMetadata", "read_resource_metadata"]
