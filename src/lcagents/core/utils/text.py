"""YAML frontmatter parsing utilities.

Agent and resource markdown files may carry YAML frontmatter delimited by
``---`` markers at the start of the file.

Example:
    ```yaml
    ---
    name: create-doc
    dependencies:
      - prd-template.md
    ---

    # Create Document
    ```
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict

import yaml


# Matches content between the first pair of '---' markers at file start
FRONTMATTER_PATTERN = re.compile(
    r"^---[ \t]*\n(.*?)\n---[ \t]*(?:\n|$)",
    re.DOTALL,
)


@dataclass
class ParsedDocument:
    """Result of parsing a document with YAML frontmatter.

    Attributes:
        frontmatter: Parsed YAML frontmatter as a dictionary
        content: The markdown content after the frontmatter
        raw_frontmatter: The raw YAML string
    """
    frontmatter: Dict[str, Any]
    content: str
    raw_frontmatter: str


def parse_frontmatter(content: str) -> ParsedDocument:
    """Parse YAML frontmatter from markdown content.

    Returns an empty frontmatter mapping when the document has none.

    Raises:
        ValueError: If frontmatter is present but is not a valid YAML mapping

    Example:
        >>> doc = parse_frontmatter('''---
        ... name: dev
        ... ---
        ...
        ... # Developer
        ... ''')
        >>> doc.frontmatter['name']
        'dev'
    """
    content = content.lstrip("\ufeff")
    match = FRONTMATTER_PATTERN.match(content)

    if not match:
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    raw_yaml = match.group(1)
    try:
        parsed = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in frontmatter: {e}") from e
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Frontmatter must be a YAML mapping, got {type(parsed).__name__}")

    return ParsedDocument(
        frontmatter=parsed,
        content=content[match.end():],
        raw_frontmatter=raw_yaml,
    )


def format_frontmatter(data: Dict[str, Any]) -> str:
    """Format a dictionary as YAML frontmatter wrapped in ``---`` delimiters."""
    yaml_content = yaml.safe_dump(
        data,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,  # Preserve insertion order
    )
    return f"---\n{yaml_content}---\n"


__all__ = [
    "ParsedDocument",
    "parse_frontmatter",
    "format_frontmatter",
    "FRONTMATTER_PATTERN",
]
