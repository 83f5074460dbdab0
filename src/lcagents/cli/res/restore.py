"""
LCAgents res restore command.

SUMMARY: Restore a previously deleted resource from backup
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, run_command
from lcagents.core.deletion import SafeDeleteManager

SUMMARY = "Restore a previously deleted resource from backup"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("backup_name", help="Backup directory name under .lcagents/backups")
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        restored = SafeDeleteManager(repo_root).restore(args.backup_name)
        formatter.success(
            {"backup": args.backup_name, "restoredPath": str(restored)},
            f"Restored {restored}",
        )
        return 0

    return run_command(args, _run)
