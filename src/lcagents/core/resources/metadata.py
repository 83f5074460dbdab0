"""Declared metadata of non-agent resources.

Only the ``dependencies`` declaration is inspected. It may be a flat list or
a mapping of category → list and is read from:

- markdown files: YAML frontmatter
- YAML files: the top-level mapping
- directories: ``metadata.yaml`` / ``metadata.yml`` inside the directory
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from lcagents.core.utils.io import read_text, read_yaml
from lcagents.core.utils.text import parse_frontmatter

MARKDOWN_SUFFIXES = {".md", ".markdown"}
YAML_SUFFIXES = {".yaml", ".yml"}
DIRECTORY_METADATA_FILES = ("metadata.yaml", "metadata.yml")


@dataclass(frozen=True)
class ResourceMetadata:
    name: str
    path: Path
    dependencies: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)


def _flatten_dependencies(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(v) for v in value if isinstance(v, (str, int, float))]
    if isinstance(value, dict):
        out: List[str] = []
        for items in value.values():
            out.extend(_flatten_dependencies(items) if isinstance(items, list) else [])
        return out
    return []


def _load_raw(path: Path) -> Dict[str, Any]:
    if path.is_dir():
        for fname in DIRECTORY_METADATA_FILES:
            candidate = path / fname
            if candidate.is_file():
                return _load_raw(candidate)
        return {}

    suffix = path.suffix.lower()
    if suffix in MARKDOWN_SUFFIXES:
        return parse_frontmatter(read_text(path)).frontmatter
    if suffix in YAML_SUFFIXES:
        data = read_yaml(path, default={}, raise_on_error=True)
        return data if isinstance(data, dict) else {}
    return {}


def read_resource_metadata(path: Path, name: str | None = None) -> ResourceMetadata:
    """Read the metadata declared by the resource at ``path``.

    Raises:
        ValueError: If the declaring YAML is malformed
        OSError: If the file cannot be read
    """
    path = Path(path)
    raw = _load_raw(path)
    return ResourceMetadata(
        name=name or path.name,
        path=path,
        dependencies=_flatten_dependencies(raw.get("dependencies")),
        raw=raw,
    )


__all__ = ["ResourceMetadata", "read_resource_metadata"]
