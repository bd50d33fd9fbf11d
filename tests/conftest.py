"""Shared fixtures for rolegen tests."""

from pathlib import Path

import pytest

from pdum.rolegen import StaticFetcher


@pytest.fixture
def fetch():
    """Canned predefined roles."""
    return StaticFetcher(
        {
            "roles/x": ["a.b.get", "a.b.create"],
            "roles/y": ["a.b.list", "c.d.delete"],
        }
    )


@pytest.fixture
def write_spec(tmp_path):
    """Write spec text to a file under tmp_path/specs and return its path."""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / "specs" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _write
