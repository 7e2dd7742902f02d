"""Root test configuration: isolate each test from the caller's config and environment"""

import pytest

from chunknamer.config import Settings


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Run from a clean tmp directory with no CHUNKNAMER_* env vars set."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"CHUNKNAMER_{name.upper()}", raising=False)


@pytest.fixture(name="book_dir")
def book_dir_fixture(tmp_path):
    """Empty book source directory at the default location."""
    d = tmp_path / "bookdown"
    d.mkdir()
    return d
