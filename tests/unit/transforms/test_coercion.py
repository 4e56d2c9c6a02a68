"""Unit tests for semantic type coercion."""

from __future__ import annotations

import math
import struct

import pytest

from core.types import BOOL_TYPE, STRING_TYPE, UNSUPPORTED_TYPE, SemanticType
from transforms.coercion import coerce_value, format_float, format_plain_float, parse_float, restringify

INT8 = SemanticType("int", 8)
UINT8 = SemanticType("uint", 8)
FLOAT64 = SemanticType("float", 64)


@pytest.mark.parametrize(
    ("raw_value", "semantic_type", "expected"),
    [
        ("42", INT8, 42),
        ("-128", INT8, -128),
        ("255", UINT8, 255),
        ("+7", SemanticType("int", 64), 7),
        ("1.5", FLOAT64, 1.5),
        ("1e3", FLOAT64, 1000.0),
        ("true", BOOL_TYPE, True),
        ("F", BOOL_TYPE, False),
        ("  padded ", STRING_TYPE, "  padded "),
    ],
)
def test_coerce_value_parses_valid_literals(raw_value: str, semantic_type: SemanticType, expected: object) -> None:
    """Valid literals should coerce without error."""
    coercion = coerce_value(raw_value, semantic_type)

    assert coercion.error is None
    assert coercion.value == expected


@pytest.mark.parametrize(
    ("raw_value", "semantic_type"),
    [
        ("128", INT8),
        ("256", UINT8),
        ("-1", UINT8),
        (" 1", INT8),
        ("1_000", SemanticType("int", 64)),
        ("abc", FLOAT64),
        ("1e999", FLOAT64),
        ("1e39", SemanticType("float", 32)),
        ("yes", BOOL_TYPE),
    ],
)
def test_coerce_value_reports_failures_with_zero_value(raw_value: str, semantic_type: SemanticType) -> None:
    """Unparseable or out-of-range literals should fail and keep the zero value."""
    coercion = coerce_value(raw_value, semantic_type)

    assert coercion.error is not None
    assert coercion.value in (0, 0.0, False)


def test_coerce_value_names_range_in_overflow_error() -> None:
    """Overflow errors should name the target width."""
    coercion = coerce_value("256", UINT8)

    assert "out of range for uint8" in (coercion.error or "")


@pytest.mark.parametrize("raw_value", ["3.4028235e38", "-3.4028235e38"])
def test_coerce_value_accepts_literals_rounding_to_float32_max(raw_value: str) -> None:
    """Literals that round to the largest float32 should stay in range."""
    coercion = coerce_value(raw_value, SemanticType("float", 32))

    assert coercion.error is None
    assert abs(coercion.value) == pytest.approx(3.4028235e38)


def test_coerce_value_rejects_literals_beyond_float32_max() -> None:
    """Literals that would round to infinity as float32 should overflow."""
    coercion = coerce_value("3.5e38", SemanticType("float", 32))

    assert "out of range for float32" in (coercion.error or "")
    assert coercion.value == 0.0


def test_coerce_value_treats_empty_as_zero() -> None:
    """Empty input should coerce to the zero value without error."""
    assert coerce_value("", INT8).value == 0
    assert coerce_value("", BOOL_TYPE).value is False
    assert coerce_value("", STRING_TYPE).value == ""
    assert coerce_value("", INT8).error is None


def test_coerce_value_rejects_unsupported_type() -> None:
    """Unsupported field types should always report an error."""
    coercion = coerce_value("x", UNSUPPORTED_TYPE)

    assert coercion.value is None
    assert coercion.error == "unsupported field type"


def test_parse_float_rejects_overflow_but_accepts_infinity() -> None:
    """Only an explicit infinity literal may parse as infinite."""
    assert math.isinf(parse_float("Inf"))

    with pytest.raises(ValueError):
        parse_float("1e400")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (18.0, "18"),
        (0.5, "0.5"),
        (1e20, "100000000000000000000"),
        (1e-7, "0.0000001"),
        (-2.25, "-2.25"),
        (float("nan"), "NaN"),
        (float("-inf"), "-Inf"),
    ],
)
def test_format_plain_float(value: float, expected: str) -> None:
    """Floats should render without exponent or trailing zeros."""
    assert format_plain_float(value) == expected


def test_format_float_uses_shortest_float32_text() -> None:
    """Float32 values should render with float32 precision."""
    widened = struct.unpack("f", struct.pack("f", 0.1))[0]

    assert format_float(widened, 32) == "0.1"
    assert format_float(widened, 64) == "0.10000000149011612"


def test_restringify_renders_canonical_text() -> None:
    """Coerced values should render back to canonical strings."""
    assert restringify(True, BOOL_TYPE) == "true"
    assert restringify(18.0, FLOAT64) == "18"
    assert restringify(7, UINT8) == "7"
