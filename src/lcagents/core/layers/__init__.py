"""Layered resource resolution for LCAgents.

Resources live in three layers under ``.lcagents/``:

  core/.<core-system>/<type>/   immutable, versioned base system
  org/<type>/                   organization overrides
  custom/<type>/                local overrides

Resolution runs custom → org → core; listing runs core → org → custom.
"""

from .model import AgentResolutionPath, Layer, ResourceType, ResourceWithSource
from .manager import LayerManager

__all__ = [
    "AgentResolutionPath",
    "Layer",
    "LayerManager",
    "ResourceType",
    "ResourceWithSource",
]
