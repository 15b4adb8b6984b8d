from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the persisted configuration file.
3. Shared structure fixtures used across unit and integration tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import patch

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_config_file(tmp_path: Path):
    """Redirect the persisted config to a temp file so tests never touch user data."""
    config_path = tmp_path / "gitsense_config" / "config.json"
    with patch("gitsense.domain.config.CONFIG_FILE", str(config_path)):
        yield config_path


@pytest.fixture
def scenario_structure() -> str:
    """The canonical tree-drawn example: one root with a nested component."""
    return (
        "app/\n"
        "├── index.ts\n"
        "└── components/\n"
        "    └── Button.tsx\n"
    )


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Mirrors the keys defined in 'gitsense.domain.config'.
    """
    return {
        "project_name": "test-project",
        "output_dir": str(tmp_path / "out"),
        "compression_level": 6,
        "indent_width": 2,
        "print_tree": False,
        "show_item_counts": False,
        "github_max_depth": 3,
    }


@pytest.fixture(autouse=True)
def release_logging():
    """Detach handlers installed by the CLI so captured streams are not reused."""
    yield
    from gitsense.infra.logging import shutdown_logging
    shutdown_logging()
