"""
LCAgents layers init command.

SUMMARY: Create the core/org/custom layer directories
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, run_command
from lcagents.core.layers import LayerManager

SUMMARY = "Create the core/org/custom layer directories"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        layers = LayerManager(repo_root)
        layers.create_layered_structure()
        formatter.success(
            {"root": str(layers.lcagents_path)},
            f"Layered structure ready in {layers.lcagents_path}",
        )
        return 0

    return run_command(args, _run)
