"""
LCAgents CLI package.

Commands are auto-discovered from domain subfolders (res/, layers/,
agents/). Each command module exposes ``SUMMARY``, ``register_args`` and
``main``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import add_json_flag, add_repo_root_flag, add_resource_args
from ._utils import get_repo_root, run_command

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_resource_args",
    "get_repo_root",
    "run_command",
]
