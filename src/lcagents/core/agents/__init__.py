"""Agent definitions and their declared dependencies."""
from __future__ import annotations

from .definition import AgentDefinition, extract_definition

__all__ = ["AgentDefinition", "extract_definition"]
