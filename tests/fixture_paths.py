"""Shared fixture helpers for tests."""

from __future__ import annotations

from pathlib import Path

_FIXTURES_ROOT = Path(__file__).resolve().parent / "fixtures"


def fixture_path(relative_path: str) -> Path:
    """Resolve a path under tests/fixtures.

    Args:
        relative_path: Path relative to the fixtures root.

    Returns:
        Absolute fixture path.
    """
    return _FIXTURES_ROOT / relative_path


def fixture_bytes(relative_path: str) -> bytes:
    """Read a fixture file as raw bytes."""
    return fixture_path(relative_path).read_bytes()
