"""
LCAgents agents list command.

SUMMARY: List agents of the active core system
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, run_command
from lcagents.core.layers import LayerManager

SUMMARY = "List agents of the active core system"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        agents = LayerManager(repo_root).list_agents()
        formatter.success({"agents": agents}, "\n".join(agents) or "No agents found")
        return 0

    return run_command(args, _run)
