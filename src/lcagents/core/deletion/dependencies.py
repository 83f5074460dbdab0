"""Dependency scanning.

There is no stored reverse index: dependents are derived on demand from each
agent's and resource's own ``dependencies`` declaration.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Set, Tuple

import yaml

from lcagents.core.exceptions import LCAgentsError, ResourceNotFoundError
from lcagents.core.layers import LayerManager, ResourceType
from lcagents.core.resources import read_resource_metadata

from .model import DependencyCheckResult, ResourceDependency

logger = logging.getLogger(__name__)

# Per-item failures tolerated while scanning declarations
_SCAN_ERRORS = (LCAgentsError, OSError, ValueError, yaml.YAMLError)


class DependencyChecker:
    """Find agents and resources that reference a resource by name."""

    def __init__(self, layers: LayerManager) -> None:
        self.layers = layers

    def _iter_agent_declarations(self) -> Iterator[Tuple[ResourceDependency, Set[str]]]:
        for agent_name in self.layers.list_agents():
            try:
                agent = self.layers.load_agent(agent_name)
                declared = {str(n) for deps in agent.dependencies.values() for n in deps}
            except _SCAN_ERRORS as exc:
                logger.warning("Failed to check dependencies for agent %s: %s", agent_name, exc)
                continue
            path = agent.path.core_path if agent.path else ""
            yield ResourceDependency(type="agent", name=agent_name, path=path), declared

    def _iter_resource_declarations(
        self, resource_type: ResourceType
    ) -> Iterator[Tuple[ResourceDependency, Set[str]]]:
        for resource in self.layers.list_resources(resource_type):
            try:
                metadata = read_resource_metadata(resource.path, resource.name)
            except _SCAN_ERRORS as exc:
                logger.warning(
                    "Failed to read metadata for %s/%s (%s layer): %s",
                    resource_type.value,
                    resource.name,
                    resource.source.value,
                    exc,
                )
                continue
            yield (
                ResourceDependency(type="resource", name=resource.name, path=str(resource.path)),
                set(metadata.dependencies),
            )

    def check_dependencies(
        self, resource_name: str, resource_type: ResourceType | str
    ) -> DependencyCheckResult:
        """Report dependents of a resource and whether it belongs to the core layer.

        Agent dependents come first, then resource dependents, each in listing
        order.

        Raises:
            ResourceNotFoundError: If the resource does not exist in any layer
        """
        rtype = ResourceType.parse(resource_type)
        resource_path = self.layers.get_resource_path(rtype, resource_name)
        if resource_path is None:
            raise ResourceNotFoundError(
                f"Resource not found: {resource_name}",
                context={"resourceName": resource_name, "resourceType": rtype.value},
            )

        is_core = self.layers.is_core_path(resource_path)

        dependencies: List[ResourceDependency] = []
        for dependent, declared in self._iter_agent_declarations():
            if resource_name in declared:
                dependencies.append(dependent)

        for dependent, declared in self._iter_resource_declarations(rtype):
            if dependent.name == resource_name:
                continue
            if resource_name in declared:
                dependencies.append(dependent)

        return DependencyCheckResult(dependencies=dependencies, is_core=is_core)

    def build_dependency_index(
        self, resource_type: ResourceType | str
    ) -> Dict[str, List[ResourceDependency]]:
        """Map each referenced name to its dependents (agents, then resources of ``resource_type``).

        Rebuilt from the source declarations on every call.
        """
        rtype = ResourceType.parse(resource_type)
        index: Dict[str, List[ResourceDependency]] = {}
        for dependent, declared in self._iter_agent_declarations():
            for name in sorted(declared):
                index.setdefault(name, []).append(dependent)
        for dependent, declared in self._iter_resource_declarations(rtype):
            for name in sorted(declared):
                if name != dependent.name:
                    index.setdefault(name, []).append(dependent)
        return index


__all__ = ["DependencyChecker"]
