"""Common argument registration helpers."""
from __future__ import annotations

import argparse

from lcagents.core.layers import ResourceType


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Output as JSON")


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--repo-root", type=str, help="Override project root path")


def add_resource_args(parser: argparse.ArgumentParser) -> None:
    """Add positional ``type`` and ``name`` arguments for a resource."""
    parser.add_argument(
        "type",
        choices=[t.value for t in ResourceType],
        help="Resource type",
    )
    parser.add_argument("name", help="Resource name (file or directory name)")


__all__ = ["add_json_flag", "add_repo_root_flag", "add_resource_args"]
