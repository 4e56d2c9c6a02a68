"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

_SIFT_ENV_VARIABLES = ("SIFT_STRICT_TAGS", "SIFT_VALID_ROWS_ONLY", "SIFT_ERROR_PREVIEW_LENGTH")


def pytest_sessionstart() -> None:
    """Add the src directory and project root to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root / "src", project_root):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def isolated_sift_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run each test with default env config and an empty schema cache."""
    from schema.compiler import clear_schema_cache

    for variable_name in _SIFT_ENV_VARIABLES:
        monkeypatch.delenv(variable_name, raising=False)
    clear_schema_cache()
    yield
    clear_schema_cache()
