"""Fixtures for CLI tests."""

import pytest

from lpgview.config import get_settings, reload_settings
from lpgview.core.demo import DemoManager


@pytest.fixture(autouse=True)
def seeded_settings(monkeypatch):
    """Deterministic layout and default storage settings for every command."""
    for key in ("LPGVIEW_PROVIDER", "LPGVIEW_ROOT_DIR", "LPGVIEW_GDRIVE_TOKEN", "LPGVIEW_SEARCH_LIMIT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LPGVIEW_LAYOUT_SEED", "1")
    reload_settings()
    yield
    get_settings.cache_clear()


@pytest.fixture
def demo_file(tmp_path):
    return DemoManager(tmp_path).provision()
