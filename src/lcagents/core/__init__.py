"""LCAgents core library package.

Layered resource resolution, dependency checking and safe deletion.
"""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
