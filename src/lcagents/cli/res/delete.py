"""
LCAgents res delete command.

SUMMARY: Safely delete a resource with dependency checking and automatic backup
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, add_resource_args, run_command
from lcagents.core.deletion import DeleteOptions, SafeDeleteManager

SUMMARY = "Safely delete a resource with dependency checking and automatic backup"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_resource_args(parser)
    parser.add_argument("--force", action="store_true", help="Delete even if dependencies exist")
    parser.add_argument(
        "--update-deps",
        action="store_true",
        help="Remove the resource from dependent agents after deletion",
    )
    parser.add_argument(
        "--skip-backup",
        action="store_true",
        help="Skip creating a backup (not recommended)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        manager = SafeDeleteManager(repo_root)
        options = DeleteOptions(
            force=args.force,
            update_deps=args.update_deps,
            skip_backup=args.skip_backup,
        )
        result = manager.safe_delete(args.name, args.type, options)

        lines = [f"Deleted {args.type}/{args.name}"]
        if result.updated_agents:
            lines.append("Updated agents: " + ", ".join(result.updated_agents))
        if result.backup_path:
            lines.append(f"Backup: {result.backup_path}")
            lines.append(f"To restore: lcagents res restore {result.backup_path.name}")
        else:
            lines.append("Warning: no backup was created")
        formatter.success(result.to_dict(), "\n".join(lines))
        return 0

    return run_command(args, _run)
