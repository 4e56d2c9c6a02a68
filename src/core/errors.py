"""Sift exception hierarchy.

This module defines traceable fatal errors with clear boundaries.
Per-cell problems are not exceptions; they are collected as row errors.
"""

from __future__ import annotations


class SiftError(Exception):
    """Base exception for all Sift failures."""


class SiftConfigError(SiftError):
    """Raised for invalid runtime configuration."""


class SiftDependencyError(SiftError):
    """Raised when an optional runtime dependency is missing."""


class SiftEmptyInputError(SiftError):
    """Raised when the input is empty or yields no table at all."""


class SiftRecordTypeError(SiftError):
    """Raised when the processing target is not a record type description."""


class SiftTagFormatError(SiftError):
    """Raised in strict mode for unknown or malformed rule tags."""


class SiftUnsupportedFileTypeError(SiftError):
    """Raised when a path or declared type maps to no supported format."""


class SiftCompressionError(SiftError):
    """Raised when compressed input cannot be decoded."""


class SiftParseError(SiftError):
    """Raised for structurally malformed table input."""


class SiftInvalidJSONError(SiftError):
    """Raised when preprocessing leaves a JSON cell syntactically invalid."""


class SiftEmptyJSONOutputError(SiftError):
    """Raised when no JSON row is left to emit after preprocessing."""


class SiftSchemaFileError(SiftError):
    """Raised for invalid or unreadable schema definition files."""
