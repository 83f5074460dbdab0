import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'lcagents'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from lcagents.core.layers import LayerManager
from lcagents.core.stdlib_logging import reset_logging_for_tests
from helpers.layout import CORE_SYSTEM, write_project_config


@pytest.fixture(autouse=True)
def _clean_lcagents_env(monkeypatch):
    """Drop LCAGENTS_* overrides leaking in from the developer environment."""
    for key in list(os.environ):
        if key.startswith("LCAGENTS_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_logging_for_tests()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project root with a configured core system and the layered
    ``.lcagents`` structure in place.
    """
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    write_project_config(root, active=CORE_SYSTEM)
    LayerManager(root).create_layered_structure()
    return root


@pytest.fixture
def lcagents_dir(isolated_project_env):
    return isolated_project_env / ".lcagents"


@pytest.fixture
def layers(isolated_project_env):
    return LayerManager(isolated_project_env)
