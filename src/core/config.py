"""Runtime configuration model for Sift.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_ERROR_PREVIEW_LENGTH
from core.errors import SiftConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class SiftConfig:
    """Validated runtime configuration.

    Attributes:
        strict_tag_parsing: Fail schema compilation on unknown/malformed tags.
        valid_rows_only: Emit and materialize only rows without errors.
        error_preview_length: Max characters of a value quoted in messages.
    """

    strict_tag_parsing: bool = False
    valid_rows_only: bool = False
    error_preview_length: int = DEFAULT_ERROR_PREVIEW_LENGTH

    @classmethod
    def from_env(cls) -> "SiftConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SiftConfigError: If environment values are invalid.
        """
        strict_value = os.getenv("SIFT_STRICT_TAGS", "false")
        valid_only_value = os.getenv("SIFT_VALID_ROWS_ONLY", "false")
        preview_value = os.getenv("SIFT_ERROR_PREVIEW_LENGTH", str(DEFAULT_ERROR_PREVIEW_LENGTH))
        return cls(
            strict_tag_parsing=_parse_flag("SIFT_STRICT_TAGS", strict_value),
            valid_rows_only=_parse_flag("SIFT_VALID_ROWS_ONLY", valid_only_value),
            error_preview_length=_parse_preview_length(preview_value),
        )


def _parse_flag(variable_name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        variable_name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean.

    Raises:
        SiftConfigError: If value is not a recognized boolean literal.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise SiftConfigError(
        f"Invalid {variable_name} value: expected boolean, got '{raw_value}'. "
        f"Set {variable_name} to true or false."
    )


def _parse_preview_length(raw_value: str) -> int:
    """Parse the error preview length environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer.

    Raises:
        SiftConfigError: If value is not a positive integer.
    """
    try:
        preview_length = int(raw_value)
    except ValueError as error:
        raise SiftConfigError(
            "Invalid SIFT_ERROR_PREVIEW_LENGTH value: "
            f"expected integer, got '{raw_value}'. "
            "Set SIFT_ERROR_PREVIEW_LENGTH to a positive number."
        ) from error
    if preview_length <= 0:
        raise SiftConfigError(
            "Invalid SIFT_ERROR_PREVIEW_LENGTH value: "
            f"expected positive integer, got {preview_length}."
        )
    return preview_length
