"""
LCAgents res check command.

SUMMARY: Show what depends on a resource
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, add_resource_args, run_command
from lcagents.core.deletion import DependencyChecker
from lcagents.core.layers import LayerManager

SUMMARY = "Show what depends on a resource"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_resource_args(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        result = DependencyChecker(LayerManager(repo_root)).check_dependencies(args.name, args.type)
        lines = [f"{args.type}/{args.name}" + (" (core, protected)" if result.is_core else "")]
        if result.has_active:
            lines.extend(f"  • {d.type}: {d.name}" for d in result.dependencies)
        else:
            lines.append("  No dependents")
        formatter.success(result.to_dict(), "\n".join(lines))
        return 0

    return run_command(args, _run)
