"""Shared fixtures: import path and a clean link environment."""

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


@pytest.fixture(autouse=True)
def clean_link_env(monkeypatch):
    """Keep developer settings out of the tests."""
    monkeypatch.delenv("LINKER_SERVER_URL", raising=False)
    monkeypatch.delenv("LINKER_MAPPINGS", raising=False)


@pytest.fixture
def server_url():
    return "https://dev.azure.com/org"
