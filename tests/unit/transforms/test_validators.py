"""Unit tests for single-field validators."""

from __future__ import annotations

import pytest

from transforms.validators import _HANDLERS, ValidatorKind, build_validator, check_value


def _check(kind: ValidatorKind, value: str, argument: str = "") -> str | None:
    return check_value(build_validator(kind, argument), value)


def test_every_validator_kind_has_a_handler() -> None:
    """Handler table should cover every validator tag."""
    assert set(_HANDLERS) == set(ValidatorKind)


@pytest.mark.parametrize(
    ("kind", "argument", "value"),
    [
        (ValidatorKind.REQUIRED, "", "x"),
        (ValidatorKind.BOOLEAN, "", "0"),
        (ValidatorKind.ALPHA, "", "abc"),
        (ValidatorKind.ALPHA_SPACE, "", "ab cd"),
        (ValidatorKind.ALPHA_UNICODE, "", "héllo"),
        (ValidatorKind.NUMERIC, "", "-12"),
        (ValidatorKind.NUMERIC, "", ""),
        (ValidatorKind.NUMBER, "", "1.5"),
        (ValidatorKind.ALPHANUMERIC, "", "a1B2"),
        (ValidatorKind.MIN, "18", "18"),
        (ValidatorKind.MAX, "120", "99.5"),
        (ValidatorKind.LEN, "3", "abc"),
        (ValidatorKind.ONE_OF, "red green", "green"),
        (ValidatorKind.LOWERCASE, "", "abc1"),
        (ValidatorKind.PRINT_ASCII, "", "a b~"),
        (ValidatorKind.EMAIL, "", "a.b@example.co"),
        (ValidatorKind.URI, "", "/relative/path"),
        (ValidatorKind.URL, "", "https://example.com/a?b=1"),
        (ValidatorKind.HTTP_URL, "", "http://example.com"),
        (ValidatorKind.URL_ENCODED, "", "a%20b"),
        (ValidatorKind.DATA_URI, "", "data:text/plain;base64,SGVsbG8="),
        (ValidatorKind.IP4_ADDR, "", "10.0.0.1"),
        (ValidatorKind.IP6_ADDR, "", "::1"),
        (ValidatorKind.CIDR, "", "10.0.0.0/8"),
        (ValidatorKind.UUID4, "", "f47ac10b-58cc-4372-a567-0e02b2c3d479"),
        (ValidatorKind.ULID, "", "01ARZ3NDEKTSV4RRFFQ69G5FAV"),
        (ValidatorKind.FQDN, "", "api.example.com"),
        (ValidatorKind.HOSTNAME, "", "web-01"),
        (ValidatorKind.HOSTNAME_PORT, "", "example.com:8080"),
        (ValidatorKind.HOSTNAME_PORT, "", "[::1]:80"),
        (ValidatorKind.STARTS_WITH, "ab", "abc"),
        (ValidatorKind.ENDS_NOT_WITH, "z", "abc"),
        (ValidatorKind.CONTAINS_ANY, "x y", "zzy"),
        (ValidatorKind.EXCLUDES_ALL, "!@", ""),
        (ValidatorKind.MULTIBYTE, "", "日本"),
        (ValidatorKind.EQ_IGNORE_CASE, "yes", "YES"),
        (ValidatorKind.DATETIME, "2006-01-02", "2024-02-29"),
        (ValidatorKind.DATETIME, "%Y/%m/%d", "2024/02/29"),
        (ValidatorKind.DATETIME, "2006-01-02", ""),
        (ValidatorKind.E164, "", "+14155552671"),
        (ValidatorKind.LATITUDE, "", "-45.5"),
        (ValidatorKind.LONGITUDE, "", "180"),
        (ValidatorKind.HEXADECIMAL, "", "0xFF"),
        (ValidatorKind.HEX_COLOR, "", "#fff"),
        (ValidatorKind.RGB, "", "rgb(255, 0, 10)"),
        (ValidatorKind.RGBA, "", "rgba(255,0,10,0.5)"),
        (ValidatorKind.HSL, "", "hsl(360, 100%, 50%)"),
        (ValidatorKind.MAC, "", "00:1A:2B:3C:4D:5E"),
    ],
)
def test_validator_accepts_valid_values(kind: ValidatorKind, argument: str, value: str) -> None:
    """Valid values should pass without a message."""
    assert _check(kind, value, argument) is None


@pytest.mark.parametrize(
    ("kind", "argument", "value", "message"),
    [
        (ValidatorKind.REQUIRED, "", "", "value is required"),
        (ValidatorKind.BOOLEAN, "", "yes", "value must be a boolean (true, false, 0, or 1)"),
        (ValidatorKind.ALPHA, "", "ab1", "value must contain only alphabetic characters"),
        (ValidatorKind.NUMERIC, "", "1.5", "value must be numeric"),
        (ValidatorKind.NUMBER, "", "1.", "value must be a valid number"),
        (ValidatorKind.MIN, "18", "17", "value must be at least 18"),
        (ValidatorKind.MIN, "18", "abc", "value must be a valid number"),
        (ValidatorKind.GT, "5", "5", "value must be greater than 5"),
        (ValidatorKind.EQ, "2.5", "3", "value must equal 2.5"),
        (ValidatorKind.LEN, "3", "ab", "value must have exactly 3 characters"),
        (ValidatorKind.ONE_OF, "red green", "blue", "value must be one of: red, green"),
        (ValidatorKind.EMAIL, "", "a@b", "value must be a valid email address"),
        (ValidatorKind.URL, "", "not a url", "value must be a valid URL"),
        (ValidatorKind.HTTPS_URL, "", "http://example.com", "value must be a valid HTTPS URL"),
        (ValidatorKind.IP4_ADDR, "", "::1", "value must be a valid IPv4 address"),
        (ValidatorKind.CIDR, "", "10.0.0.1", "value must be a valid CIDR"),
        (ValidatorKind.FQDN, "", "localhost", "value must be a valid FQDN"),
        (ValidatorKind.HOSTNAME_PORT, "", "example.com:99999", "value must be a valid hostname:port"),
        (ValidatorKind.CONTAINS, "@", "abc", "value must contain '@'"),
        (ValidatorKind.EXCLUDES_ALL, "!@", "a!b", "value must not contain any of: !@"),
        (ValidatorKind.MULTIBYTE, "", "abc", "value must contain multibyte characters"),
        (
            ValidatorKind.DATETIME,
            "2006-01-02",
            "2024-02-30",
            "value must be a valid datetime in format: 2006-01-02",
        ),
        (ValidatorKind.LATITUDE, "", "91", "value must be a valid latitude (-90 to 90)"),
        (ValidatorKind.HEX_COLOR, "", "fff", "value must be a valid hex color"),
        (ValidatorKind.MAC, "", "00:1A:2B", "value must be a valid MAC address"),
    ],
)
def test_validator_reports_failures(kind: ValidatorKind, argument: str, value: str, message: str) -> None:
    """Invalid values should produce the documented message."""
    assert _check(kind, value, argument) == message


@pytest.mark.parametrize(
    ("kind", "argument"),
    [
        (ValidatorKind.MIN, "abc"),
        (ValidatorKind.LEN, "x"),
        (ValidatorKind.ONE_OF, ""),
        (ValidatorKind.CONTAINS, ""),
        (ValidatorKind.DATETIME, ""),
    ],
)
def test_build_validator_rejects_bad_arguments(kind: ValidatorKind, argument: str) -> None:
    """Malformed arguments should fail at compile time."""
    with pytest.raises(ValueError):
        build_validator(kind, argument)


def test_validator_tag_matches_kind() -> None:
    """Validator tags should be the tag names written in metadata."""
    assert build_validator(ValidatorKind.HTTP_URL, "").tag == "http_url"
