"""Shared CLI utilities."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable

from lcagents.core.config import ConfigManager
from lcagents.core.exceptions import LCAgentsError
from lcagents.core.stdlib_logging import configure_logging

from ._output import OutputFormatter

logger = logging.getLogger(__name__)


def get_repo_root(args: argparse.Namespace) -> Path:
    """Project root from ``--repo-root`` or the current directory."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return Path.cwd().resolve()


def _setup_logging(repo_root: Path) -> None:
    config = ConfigManager(repo_root)
    log_file = config.get("logging.file")
    log_path = (config.lcagents_dir / str(log_file)) if log_file else None
    configure_logging(level=str(config.get("logging.level", "WARNING")), log_path=log_path)


def run_command(args: argparse.Namespace, body: Callable[[Path, OutputFormatter], int]) -> int:
    """Run a command body with logging configured and errors rendered.

    LCAgents errors and OS errors become exit status 1.
    """
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = get_repo_root(args)
        _setup_logging(repo_root)
        return body(repo_root, formatter)
    except (LCAgentsError, OSError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        formatter.error(exc)
        return 1


__all__ = ["get_repo_root", "run_command"]
