"""Shared utilities for LCAgents core (file I/O, text, merging, time)."""
from __future__ import annotations

from .io import (
    atomic_write,
    copy_path,
    ensure_directory,
    read_json,
    read_text,
    read_yaml,
    remove_path,
    write_json_atomic,
    write_text,
)
from .merge import deep_merge
from .text import ParsedDocument, format_frontmatter, parse_frontmatter
from .time import filesystem_timestamp, utc_timestamp

__all__ = [
    "atomic_write",
    "copy_path",
    "ensure_directory",
    "read_json",
    "read_text",
    "read_yaml",
    "remove_path",
    "write_json_atomic",
    "write_text",
    "deep_merge",
    "ParsedDocument",
    "format_frontmatter",
    "parse_frontmatter",
    "filesystem_timestamp",
    "utc_timestamp",
]
