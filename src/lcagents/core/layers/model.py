"""Layer and resource data model."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Tuple

from lcagents.core.exceptions import InvalidArgumentError


class ResourceType(str, Enum):
    """Resource category; the value is the subdirectory name inside a layer."""

    AGENTS = "agents"
    CHECKLISTS = "checklists"
    TEMPLATES = "templates"
    DATA = "data"
    TASKS = "tasks"
    WORKFLOWS = "workflows"
    UTILS = "utils"

    @classmethod
    def parse(cls, value: "str | ResourceType") -> "ResourceType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            valid = ", ".join(t.value for t in cls)
            raise InvalidArgumentError(
                f"Invalid resource type: {value}. Valid types: {valid}",
                context={"resourceType": str(value)},
            ) from exc


class Layer(str, Enum):
    """Storage layer. Resolution runs custom → org → core (most specific wins)."""

    CORE = "core"
    ORG = "org"
    CUSTOM = "custom"

    @classmethod
    def enumeration_order(cls) -> Tuple["Layer", ...]:
        """Order used for listing and provenance labeling."""
        return (cls.CORE, cls.ORG, cls.CUSTOM)

    @classmethod
    def precedence_order(cls) -> Tuple["Layer", ...]:
        """Order used for resolution; the first hit wins."""
        return (cls.CUSTOM, cls.ORG, cls.CORE)


@dataclass(frozen=True)
class ResourceWithSource:
    """A resource entry found in a specific layer."""

    name: str
    path: Path
    source: Layer

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": str(self.path), "source": self.source.value}


@dataclass(frozen=True)
class AgentResolutionPath:
    """Resolved location of an agent plus the layers that override it.

    An instance with an empty ``core_system`` is the *unconfigured* variant:
    no core system is active, so there is nothing to resolve. Callers check
    :attr:`is_resolved` before using any path.
    """

    agent_id: str
    core_system: str = ""
    core_path: str = ""
    final_path: str = ""
    layer_sources: Tuple[Layer, ...] = field(default_factory=tuple)

    @classmethod
    def unconfigured(cls, agent_id: str) -> "AgentResolutionPath":
        return cls(agent_id=agent_id)

    @property
    def is_resolved(self) -> bool:
        return bool(self.core_system)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agentId": self.agent_id,
            "coreSystem": self.core_system,
            "corePath": self.core_path,
            "finalPath": self.final_path,
            "layerSources": [layer.value for layer in self.layer_sources],
        }


__all__ = ["ResourceType", "Layer", "ResourceWithSource", "AgentResolutionPath"]
