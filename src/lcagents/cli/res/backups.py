"""
LCAgents res backups command.

SUMMARY: List available backups
"""

from __future__ import annotations

import argparse
from pathlib import Path

from lcagents.cli import OutputFormatter, add_json_flag, add_repo_root_flag, run_command
from lcagents.core.deletion import BackupStore
from lcagents.core.layers import LayerManager

SUMMARY = "List available backups"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    def _run(repo_root: Path, formatter: OutputFormatter) -> int:
        names = BackupStore(LayerManager(repo_root)).list_backups()
        formatter.success({"backups": names}, "\n".join(names) or "No backups found")
        return 0

    return run_command(args, _run)
