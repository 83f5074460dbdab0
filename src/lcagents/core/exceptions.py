from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence


class LCAgentsError(Exception):
    """Base exception for LCAgents."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ResourceNotFoundError(LCAgentsError, FileNotFoundError):
    """Raised when a resource, agent or backup cannot be found in any layer."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LCAgentsError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class InvalidArgumentError(LCAgentsError, ValueError):
    """Raised when an operation receives malformed input."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LCAgentsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class CoreSystemNotConfiguredError(LCAgentsError):
    """Raised when an operation requires an active core system and none is set."""


class CoreResourceProtectedError(LCAgentsError):
    """Raised on any attempt to mutate a resource owned by the core layer."""


class DependenciesExistError(LCAgentsError):
    """Raised when a resource still has dependents and deletion was not forced."""

    def __init__(
        self,
        message: str = "",
        *,
        dependencies: Sequence[Any] = (),
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.dependencies: List[Any] = list(dependencies)
        ctx = dict(context or {})
        ctx.setdefault(
            "dependencies",
            [d.to_dict() if hasattr(d, "to_dict") else d for d in self.dependencies],
        )
        super().__init__(message, context=ctx)


class InvalidBackupError(LCAgentsError):
    """Raised when a backup directory lacks valid metadata."""


class StaleLocationError(LCAgentsError):
    """Raised when a backup's original parent directory no longer exists."""


__all__ = [
    "LCAgentsError",
    "ResourceNotFoundError",
    "InvalidArgumentError",
    "CoreSystemNotConfiguredError",
    "CoreResourceProtectedError",
    "DependenciesExistError",
    "InvalidBackupError",
    "StaleLocationError",
]
