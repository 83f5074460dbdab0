"""
LCAgents agents resolve command.

SUMMARY: Show where an agent resolves and which layers override it
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, run_command
from lcagents.core.layers import LayerManager

SUMMARY = "Show where an agent resolves and which layers override it"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("agent_id", help="Agent identifier (file name without extension)")
    parser.add_argument("--core-system", help="Resolve against this core system instead of the active one")
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        resolution = LayerManager(repo_root).resolve_agent(args.agent_id, args.core_system)
        if not resolution.is_resolved:
            message = "No active core system configured"
        else:
            sources = " → ".join(layer.value for layer in resolution.layer_sources)
            message = f"{resolution.agent_id}: {resolution.final_path} ({sources})"
        formatter.success(resolution.to_dict(), message)
        return 0

    return run_command(args, _run)
