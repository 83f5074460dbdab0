"""Layer-aware path resolution for ``.lcagents`` resources.

The manager only computes and checks paths; it never caches resource
content. The active core system is queried on every call so a switch of
``core.active`` is picked up immediately.
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from lcagents.core.agents import AgentDefinition
from lcagents.core.config import ConfigManager
from lcagents.core.coresystem import CoreSystemManager, CoreSystemProvider
from lcagents.core.exceptions import InvalidArgumentError, ResourceNotFoundError
from lcagents.core.utils.io import ensure_directory, read_text, remove_path, write_text

from .model import AgentResolutionPath, Layer, ResourceType, ResourceWithSource

logger = logging.getLogger(__name__)

DEFAULT_SCAFFOLD_TYPES: Tuple[str, ...] = ("agents", "tasks", "templates", "workflows", "utils", "data")
OVERRIDES_DIRNAME = "overrides"
VIRTUAL_DIRNAME = "virtual"


def _validate_name(value: str, *, what: str) -> str:
    name = str(value or "").strip()
    if not name or name in {".", ".."} or "/" in name or "\\" in name:
        raise InvalidArgumentError(f"Invalid {what}: {value!r}", context={what: str(value)})
    return name


class LayerManager:
    """Resolve resources across the core, org and custom layers.

    Example:
        layers = LayerManager(project_root)
        template = layers.resolve_template("prd-template.yaml")
        print(template.source, template.path)
    """

    def __init__(
        self,
        base_path: Path,
        *,
        core_system: Optional[CoreSystemProvider] = None,
        config: Optional[ConfigManager] = None,
    ) -> None:
        self.base_path = Path(base_path).resolve()
        self.config = config or ConfigManager(self.base_path)
        self.core_system = core_system or CoreSystemManager(config=self.config)
        self.lcagents_path = self.config.lcagents_dir
        self.agent_extension = str(self.config.get("agents.extension", ".md"))
        self.override_extension = str(self.config.get("agents.override_extension", ".yaml"))
        self.scaffold_types: Tuple[str, ...] = tuple(
            self.config.get("layers.scaffold_types") or DEFAULT_SCAFFOLD_TYPES
        )

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def active_core_system(self) -> Optional[str]:
        return self.core_system.get_active_core_system() or None

    def layer_root(self, layer: Layer) -> Path:
        return self.lcagents_path / Layer(layer).value

    def core_system_dir(self, core_system: str) -> Path:
        return self.layer_root(Layer.CORE) / f".{core_system}"

    def layer_dir(
        self, layer: Layer, resource_type: ResourceType | str, *, core_system: Optional[str] = None
    ) -> Optional[Path]:
        """Directory holding ``resource_type`` in ``layer``.

        Returns None for the core layer when no core system is active.
        """
        rtype = ResourceType.parse(resource_type)
        if Layer(layer) is Layer.CORE:
            system = core_system or self.active_core_system()
            if not system:
                return None
            return self.core_system_dir(system) / rtype.value
        return self.layer_root(layer) / rtype.value

    def _iter_layer_dirs(
        self, resource_type: ResourceType | str, order: Sequence[Layer]
    ) -> Iterator[Tuple[Layer, Path]]:
        for layer in order:
            directory = self.layer_dir(layer, resource_type)
            if directory is not None:
                yield layer, directory

    def is_core_path(self, path: Path | str) -> bool:
        """True when ``path`` lies inside the active core system's subtree."""
        active = self.active_core_system()
        if not active:
            return False
        core_root = self.core_system_dir(active).resolve()
        return Path(path).resolve().is_relative_to(core_root)

    # ------------------------------------------------------------------
    # Agents
    # ------------------------------------------------------------------

    def resolve_agent(self, agent_id: str, core_system: Optional[str] = None) -> AgentResolutionPath:
        """Resolve an agent's core definition and record which layers override it.

        Without an active (or explicitly given) core system the unconfigured
        variant is returned instead of raising.
        """
        system = core_system or self.active_core_system()
        if not system:
            return AgentResolutionPath.unconfigured(agent_id)

        core_path = self.core_system_dir(system) / "agents" / f"{agent_id}{self.agent_extension}"
        sources: List[Layer] = [Layer.CORE]
        for layer in (Layer.ORG, Layer.CUSTOM):
            override = self.layer_root(layer) / "agents" / OVERRIDES_DIRNAME / f"{agent_id}{self.override_extension}"
            if override.exists():
                sources.append(layer)

        return AgentResolutionPath(
            agent_id=agent_id,
            core_system=system,
            core_path=str(core_path),
            final_path=str(core_path),
            layer_sources=tuple(sources),
        )

    def list_agents(self) -> List[str]:
        """Agent identifiers from the active core system (empty when unconfigured)."""
        agents_dir = self.layer_dir(Layer.CORE, ResourceType.AGENTS)
        if agents_dir is None or not agents_dir.is_dir():
            return []
        ext = self.agent_extension
        return [
            entry.name[: -len(ext)]
            for entry in sorted(agents_dir.iterdir())
            if entry.is_file() and entry.name.endswith(ext)
        ]

    def load_agent(self, agent_name: str) -> AgentDefinition:
        resolution = self.resolve_agent(agent_name)
        if not resolution.is_resolved or not Path(resolution.core_path).exists():
            raise ResourceNotFoundError(
                f"Agent {agent_name} not found",
                context={"agent": agent_name, "coreSystem": resolution.core_system},
            )
        return AgentDefinition(
            name=agent_name,
            content=read_text(resolution.core_path),
            path=resolution,
        )

    def save_agent(self, agent: AgentDefinition) -> Path:
        if agent.path is None or not agent.path.core_path:
            raise InvalidArgumentError(
                "Invalid agent object - missing path information",
                context={"agent": getattr(agent, "name", None)},
            )
        target = Path(agent.path.core_path)
        write_text(target, agent.content)
        logger.debug("Saved agent %s to %s", agent.name, target)
        return target

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def list_resources(self, resource_type: ResourceType | str) -> List[ResourceWithSource]:
        """List every resource of a type, core → org → custom.

        Entries with the same name in several layers are all returned, each
        tagged with its own layer. Hidden entries and ``overrides/`` are skipped.
        """
        found: List[ResourceWithSource] = []
        for layer, directory in self._iter_layer_dirs(resource_type, Layer.enumeration_order()):
            if not directory.is_dir():
                continue
            for entry in sorted(directory.iterdir()):
                if entry.name.startswith("."):
                    continue
                if layer is not Layer.CORE and entry.name == OVERRIDES_DIRNAME and entry.is_dir():
                    continue
                found.append(ResourceWithSource(name=entry.name, path=entry, source=layer))
        return found

    def find_resource(
        self,
        resource_type: ResourceType | str,
        resource_name: str,
        *,
        layers: Optional[Sequence[Layer]] = None,
    ) -> Optional[ResourceWithSource]:
        """Return the first layer (custom → org → core by default) holding the resource."""
        name = _validate_name(resource_name, what="resourceName")
        for layer, directory in self._iter_layer_dirs(resource_type, layers or Layer.precedence_order()):
            candidate = directory / name
            if candidate.exists():
                return ResourceWithSource(name=name, path=candidate, source=layer)
        return None

    def get_resource_path(
        self,
        resource_type: ResourceType | str,
        resource_name: str,
        *,
        layer: Optional[Layer] = None,
    ) -> Optional[Path]:
        """Effective path of a resource, or None.

        Honors custom → org → core precedence; pass ``layer`` to inspect a
        single layer (``Layer.CORE`` gives the core-only lookup).
        """
        layers = (Layer(layer),) if layer is not None else None
        hit = self.find_resource(resource_type, resource_name, layers=layers)
        return hit.path if hit else None

    def resolve_resource(self, resource_type: ResourceType | str, resource_name: str) -> ResourceWithSource:
        hit = self.find_resource(resource_type, resource_name)
        if hit is None:
            rtype = ResourceType.parse(resource_type)
            raise ResourceNotFoundError(
                f"Resource {resource_name} of type {rtype.value} not found in any layer",
                context={"resourceName": resource_name, "resourceType": rtype.value},
            )
        return hit

    def resolve_template(self, template_name: str) -> ResourceWithSource:
        return self.resolve_resource(ResourceType.TEMPLATES, template_name)

    def read_resource(self, resource_type: ResourceType | str, resource_name: str) -> str:
        path = self.get_resource_path(resource_type, resource_name)
        if path is None:
            rtype = ResourceType.parse(resource_type)
            raise ResourceNotFoundError(
                f"Resource {resource_name} of type {rtype.value} not found",
                context={"resourceName": resource_name, "resourceType": rtype.value},
            )
        return read_text(path)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def create_layered_structure(self) -> None:
        for layer in Layer.enumeration_order():
            layer_path = ensure_directory(self.layer_root(layer))
            for rtype in self.scaffold_types:
                ensure_directory(layer_path / rtype)
                if layer is not Layer.CORE:
                    ensure_directory(layer_path / rtype / OVERRIDES_DIRNAME)

    def migrate_from_flat_structure(self, core_system_name: str) -> Path:
        """Move flat ``.lcagents/<type>`` directories into ``core/.<name>/<type>``.

        Existing targets are overwritten; types without a flat directory get an
        empty one.
        """
        name = _validate_name(core_system_name, what="coreSystem")
        new_core = ensure_directory(self.core_system_dir(name))

        for rtype in self.scaffold_types:
            old_path = self.lcagents_path / rtype
            new_path = new_core / rtype
            if old_path.exists():
                if new_path.exists():
                    remove_path(new_path)
                shutil.move(str(old_path), str(new_path))
                logger.info("Migrated %s into core system %s", old_path, name)
            else:
                ensure_directory(new_path)
        return new_core

    def create_virtual_resolution_system(self, core_system_name: str) -> Path:
        name = _validate_name(core_system_name, what="coreSystem")
        virtual = ensure_directory(self.lcagents_path / VIRTUAL_DIRNAME)

        if not self.core_system_dir(name).exists():
            raise ResourceNotFoundError(
                f"Core system {name} not found",
                context={"coreSystem": name},
            )

        for rtype in self.scaffold_types:
            ensure_directory(virtual / rtype)
        return virtual


__all__ = ["LayerManager", "DEFAULT_SCAFFOLD_TYPES", "OVERRIDES_DIRNAME"]
