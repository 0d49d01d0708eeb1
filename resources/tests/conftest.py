"""Pytest configuration for resources/tests.

Ensures the repository root is on sys.path so tests can import
helpers via absolute package path like `resources.tests.helpers`.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mcp_extension.utils.config import ExtensionSettings  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def repo_root() -> Path:
    return ROOT


@pytest.fixture
def settings(tmp_path) -> ExtensionSettings:
    """Settings isolated from config/.env, pointing at a manifest that does not exist."""
    return ExtensionSettings(_env_file=None, manifest_path=str(tmp_path / "absent.yaml"))
