"""Agent definition documents.

An agent is a markdown file whose YAML configuration declares, among other
things, the resources it depends on, keyed by category::

    dependencies:
      tasks:
        - create-doc.md
      templates:
        - prd-template.yaml

The YAML is read either from frontmatter or from the first fenced ```yaml
block that holds a ``dependencies`` key.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import yaml

from lcagents.core.utils.text import FRONTMATTER_PATTERN, format_frontmatter, parse_frontmatter

if TYPE_CHECKING:
    from lcagents.core.layers.model import AgentResolutionPath

YAML_BLOCK_PATTERN = re.compile(r"```ya?ml[ \t]*\n(.*?)\n```", re.DOTALL)

# Category name used when ``dependencies`` is a flat list
UNCATEGORIZED = "dependencies"


@dataclass
class _DefinitionBlock:
    kind: str  # "frontmatter" | "fenced"
    start: int
    end: int
    data: Dict[str, Any]


def _find_block(content: str) -> Optional[_DefinitionBlock]:
    stripped = content.lstrip("\ufeff")
    offset = len(content) - len(stripped)
    match = FRONTMATTER_PATTERN.match(stripped)
    if match:
        frontmatter = parse_frontmatter(stripped).frontmatter
        if "dependencies" in frontmatter:
            return _DefinitionBlock("frontmatter", offset, offset + match.end(), frontmatter)

    for match in YAML_BLOCK_PATTERN.finditer(content):
        try:
            data = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in agent definition block: {e}") from e
        if isinstance(data, dict) and "dependencies" in data:
            return _DefinitionBlock("fenced", match.start(1), match.end(1), data)
    return None


def extract_definition(content: str) -> Dict[str, Any]:
    """Return the agent's YAML configuration mapping (empty when none is declared).

    Raises:
        ValueError: If the YAML holding the configuration is malformed
    """
    block = _find_block(content)
    return block.data if block else {}


def _dependency_lists(definition: Dict[str, Any]) -> Dict[str, List[Any]]:
    deps = definition.get("dependencies")
    if isinstance(deps, list):
        return {UNCATEGORIZED: deps}
    if not isinstance(deps, dict):
        return {}
    return {str(k): v for k, v in deps.items() if isinstance(v, list)}


@dataclass
class AgentDefinition:
    """An agent record loaded from the core layer."""

    name: str
    content: str
    path: Optional[AgentResolutionPath] = None

    @property
    def definition(self) -> Dict[str, Any]:
        return extract_definition(self.content)

    @property
    def dependencies(self) -> Dict[str, List[Any]]:
        """Dependency arrays keyed by category."""
        return _dependency_lists(self.definition)

    def depends_on(self, resource_name: str) -> bool:
        return any(resource_name in deps for deps in self.dependencies.values())

    def remove_dependency(self, resource_name: str) -> bool:
        """Drop ``resource_name`` from every dependency array.

        Rewrites :attr:`content` in place and returns True when anything changed.
        """
        block = _find_block(self.content)
        if block is None:
            return False

        changed = False
        for deps in _dependency_lists(block.data).values():
            while resource_name in deps:
                deps.remove(resource_name)
                changed = True
        if not changed:
            return False

        if block.kind == "frontmatter":
            replacement = format_frontmatter(block.data)
        else:
            replacement = yaml.safe_dump(
                block.data,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            ).rstrip("\n")
        self.content = self.content[: block.start] + replacement + self.content[block.end:]
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path.to_dict() if self.path else None,
            "dependencies": self.dependencies,
        }


__all__ = ["AgentDefinition", "extract_definition", "YAML_BLOCK_PATTERN"]
