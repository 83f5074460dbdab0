"""
LCAgents - layered agent resource management

LCAgents installs an agent framework into a project's ``.lcagents/``
directory and resolves its resources across core, org and custom layers.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
