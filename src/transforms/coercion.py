"""Semantic type coercion for preprocessed cell values.

Parsing is strict: numbers must be plain decimal literals, booleans must
be one of the canonical literals. Failures are reported, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math
import re
import struct
from typing import Any

from core.constants import FALSE_BOOL_LITERALS, TRUE_BOOL_LITERALS
from core.types import SemanticType

_INT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UINT_PATTERN = re.compile(r"[0-9]+", re.ASCII)
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.ASCII | re.IGNORECASE,
)
_ZERO_VALUES: dict[str, Any] = {"string": "", "int": 0, "uint": 0, "float": 0.0, "bool": False}


@dataclass(frozen=True)
class Coercion:
    """Outcome of coercing one value.

    Attributes:
        value: Typed value, or the zero value when coercion failed.
        error: Failure description, or None on success.
    """

    value: Any
    error: str | None = None


def zero_value(semantic_type: SemanticType) -> Any:
    """Return the zero value for a semantic type."""
    return _ZERO_VALUES.get(semantic_type.kind)


def parse_float(text: str) -> float:
    """Parse a plain float literal without Python-only leniency.

    Surrounding whitespace and digit separators are rejected.

    Args:
        text: Candidate literal.

    Returns:
        Parsed float.

    Raises:
        ValueError: If text is not a float literal or overflows float64.
    """
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    parsed = float(text)
    if math.isinf(parsed) and "inf" not in text.lower():
        raise ValueError(f"value out of range: {text!r}")
    return parsed


def format_plain_float(value: float) -> str:
    """Format a float as its shortest round-trip text without exponent.

    Args:
        value: Finite or non-finite float.

    Returns:
        Text such as ``18``, ``0.5`` or ``100000000000000000000``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0" if math.copysign(1.0, value) > 0 else "-0"
    return text


def coerce_value(raw_value: str, semantic_type: SemanticType) -> Coercion:
    """Coerce a preprocessed string into its semantic type.

    Empty strings coerce to the zero value without error.

    Args:
        raw_value: Preprocessed cell text.
        semantic_type: Target type of the field.

    Returns:
        Coercion outcome with typed value or error text.
    """
    if semantic_type.kind == "unsupported":
        return Coercion(value=None, error="unsupported field type")
    if raw_value == "" or semantic_type.kind == "string":
        return Coercion(value=raw_value if semantic_type.kind == "string" else zero_value(semantic_type))
    try:
        return Coercion(value=_PARSERS[semantic_type.kind](raw_value, semantic_type.bits))
    except ValueError as error:
        return Coercion(value=zero_value(semantic_type), error=str(error))


def restringify(value: Any, semantic_type: SemanticType) -> str:
    """Render a coerced value back to text for validation.

    Args:
        value: Coerced value.
        semantic_type: Type the value was coerced into.

    Returns:
        Canonical string form.
    """
    if semantic_type.kind == "bool":
        return "true" if value else "false"
    if semantic_type.kind == "float":
        return format_float(value, semantic_type.bits)
    return str(value)


def _parse_int(raw_value: str, bits: int) -> int:
    if not _INT_PATTERN.fullmatch(raw_value):
        raise ValueError(f"invalid syntax: {raw_value!r} is not an integer")
    parsed = int(raw_value)
    lower, upper = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not lower <= parsed <= upper:
        raise ValueError(f"value {raw_value!r} out of range for int{bits}")
    return parsed


def _parse_uint(raw_value: str, bits: int) -> int:
    if not _UINT_PATTERN.fullmatch(raw_value):
        raise ValueError(f"invalid syntax: {raw_value!r} is not an unsigned integer")
    parsed = int(raw_value)
    if parsed > (1 << bits) - 1:
        raise ValueError(f"value {raw_value!r} out of range for uint{bits}")
    return parsed


def _parse_typed_float(raw_value: str, bits: int) -> float:
    parsed = parse_float(raw_value)
    if bits == 32 and math.isfinite(parsed):
        try:
            _to_float32(parsed)
        except OverflowError as error:
            raise ValueError(f"value {raw_value!r} out of range for float32") from error
    return parsed


def _parse_bool(raw_value: str, _bits: int) -> bool:
    if raw_value in TRUE_BOOL_LITERALS:
        return True
    if raw_value in FALSE_BOOL_LITERALS:
        return False
    raise ValueError(f"invalid syntax: {raw_value!r} is not a boolean")


def format_float(value: float, bits: int) -> str:
    """Format a float as the shortest text that round-trips at its width.

    Args:
        value: Float value.
        bits: 32 or 64.

    Returns:
        Plain decimal text without exponent.
    """
    if bits == 32 and math.isfinite(value):
        # Shortest text that survives a float32 round trip.
        for digits in range(1, 10):
            candidate = float(f"{value:.{digits}g}")
            if _to_float32(candidate) == _to_float32(value):
                return format_plain_float(candidate)
    return format_plain_float(value)


def _to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_PARSERS = {
    "int": _parse_int,
    "uint": _parse_uint,
    "float": _parse_typed_float,
    "bool": _parse_bool,
}
