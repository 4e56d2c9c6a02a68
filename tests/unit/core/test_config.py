"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import SiftConfig
from core.constants import DEFAULT_ERROR_PREVIEW_LENGTH
from core.errors import SiftConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to defaults when variables are unset."""
    monkeypatch.delenv("SIFT_STRICT_TAGS", raising=False)
    monkeypatch.delenv("SIFT_VALID_ROWS_ONLY", raising=False)
    monkeypatch.delenv("SIFT_ERROR_PREVIEW_LENGTH", raising=False)

    config = SiftConfig.from_env()

    assert config == SiftConfig(
        strict_tag_parsing=False,
        valid_rows_only=False,
        error_preview_length=DEFAULT_ERROR_PREVIEW_LENGTH,
    )


def test_from_env_reads_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should parse boolean flags case-insensitively."""
    monkeypatch.setenv("SIFT_STRICT_TAGS", "TRUE")
    monkeypatch.setenv("SIFT_VALID_ROWS_ONLY", "yes")
    monkeypatch.setenv("SIFT_ERROR_PREVIEW_LENGTH", "40")

    config = SiftConfig.from_env()

    assert config.strict_tag_parsing is True
    assert config.valid_rows_only is True
    assert config.error_preview_length == 40


def test_from_env_raises_for_invalid_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unrecognized boolean literals."""
    monkeypatch.setenv("SIFT_STRICT_TAGS", "maybe")

    with pytest.raises(SiftConfigError, match="SIFT_STRICT_TAGS"):
        SiftConfig.from_env()


@pytest.mark.parametrize("raw_value", ["abc", "0", "-5"])
def test_from_env_raises_for_invalid_preview_length(
    monkeypatch: pytest.MonkeyPatch,
    raw_value: str,
) -> None:
    """Config should require a positive integer preview length."""
    monkeypatch.setenv("SIFT_ERROR_PREVIEW_LENGTH", raw_value)

    with pytest.raises(SiftConfigError, match="SIFT_ERROR_PREVIEW_LENGTH"):
        SiftConfig.from_env()
