"""
LCAgents res list command.

SUMMARY: List resources of a type across core, org and custom layers
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, run_command
from lcagents.core.layers import LayerManager, ResourceType

SUMMARY = "List resources of a type across core, org and custom layers"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("type", choices=[t.value for t in ResourceType], help="Resource type")
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        resources = LayerManager(repo_root).list_resources(args.type)
        lines = [f"[{r.source.value}] {r.name}" for r in resources] or [f"No {args.type} found"]
        formatter.success(
            {"type": args.type, "resources": [r.to_dict() for r in resources]},
            "\n".join(lines),
        )
        return 0

    return run_command(args, _run)
