"""
LCAgents layers virtual command.

SUMMARY: Create the virtual resolution directories for a core system
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, run_command
from lcagents.core.layers import LayerManager

SUMMARY = "Create the virtual resolution directories for a core system"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("core_system", help="Core system name (e.g., bmad-core)")
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        virtual = LayerManager(repo_root).create_virtual_resolution_system(args.core_system)
        formatter.success({"coreSystem": args.core_system, "path": str(virtual)}, f"Virtual layer ready in {virtual}")
        return 0

    return run_command(args, _run)
