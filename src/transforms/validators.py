"""Single-field validators.

Validators inspect one preprocessed value and return a failure message,
or None when the value passes. Formats that are commonly optional
(numeric, geo, colors, phone, datetime) pass on empty input; pair them
with ``required`` to reject blanks.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
import ipaddress
import re
from typing import Any, Callable
from urllib.parse import urlsplit

from transforms.coercion import format_plain_float, parse_float

_UUID_PATTERN = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
_UUID_VERSION_PATTERNS = {
    3: re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-3[0-9a-fA-F]{3}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"),
    4: re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}"),
    5: re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-5[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}"),
}
_ULID_PATTERN = re.compile(r"[A-HJKMNP-TV-Z0-9]{26}", re.IGNORECASE)
_DATA_URI_PATTERN = re.compile(r"data:[^;]+;base64,[A-Za-z0-9+/]+={0,2}")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_NUMBER_PATTERN = re.compile(r"[-+]?[0-9]+(\.[0-9]+)?")
_NUMERIC_PATTERN = re.compile(r"[+-]?[0-9]+")
_URL_ENCODED_PATTERN = re.compile(r"(?:[^%]|%[0-9A-Fa-f]{2})*", re.DOTALL)
_FQDN_LABEL_PATTERN = re.compile(r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?")
_RFC952_LABEL_PATTERN = re.compile(r"[A-Za-z](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")
_RFC1123_LABEL_PATTERN = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")
_E164_PATTERN = re.compile(r"\+[1-9]?[0-9]{7,14}")
_LATITUDE_PATTERN = re.compile(r"[-+]?([1-8]?\d(\.\d+)?|90(\.0+)?)", re.ASCII)
_LONGITUDE_PATTERN = re.compile(r"[-+]?(180(\.0+)?|((1[0-7]\d)|([1-9]?\d))(\.\d+)?)", re.ASCII)
_HEXADECIMAL_PATTERN = re.compile(r"(0[xX])?[0-9a-fA-F]+")
_HEX_COLOR_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_BYTE = r"(?:0|[1-9]\d?|1\d\d?|2[0-4]\d|25[0-5])"
_RGB_BODY = rf"\s*(?:{_BYTE}\s*,\s*{_BYTE}\s*,\s*{_BYTE}|{_BYTE}%\s*,\s*{_BYTE}%\s*,\s*{_BYTE}%)"
_ALPHA_CHANNEL = r"\s*,\s*(?:(?:0.[1-9]*)|[01])"
_RGB_PATTERN = re.compile(rf"rgb\({_RGB_BODY}\s*\)", re.ASCII)
_RGBA_PATTERN = re.compile(rf"rgba\({_RGB_BODY}{_ALPHA_CHANNEL}\s*\)", re.ASCII)
_HUE = r"(?:0|[1-9]\d?|[12]\d\d|3[0-5]\d|360)"
_PERCENT = r"(?:(?:0|[1-9]\d?|100)%)"
_HSL_BODY = rf"\s*{_HUE}\s*,\s*{_PERCENT}\s*,\s*{_PERCENT}"
_HSL_PATTERN = re.compile(rf"hsl\({_HSL_BODY}\s*\)", re.ASCII)
_HSLA_PATTERN = re.compile(rf"hsla\({_HSL_BODY}{_ALPHA_CHANNEL}\s*\)", re.ASCII)
_MAC_PATTERNS = (
    re.compile(r"[0-9A-Fa-f]{2}(?:([:-])[0-9A-Fa-f]{2})(?:\1[0-9A-Fa-f]{2}){4}(?:(?:\1[0-9A-Fa-f]{2}){2}(?:(?:\1[0-9A-Fa-f]{2}){12})?)?"),
    re.compile(r"[0-9A-Fa-f]{4}\.[0-9A-Fa-f]{4}\.[0-9A-Fa-f]{4}(?:\.[0-9A-Fa-f]{4}(?:(?:\.[0-9A-Fa-f]{4}){5})?)?"),
)
_REFERENCE_LAYOUT_TOKENS = (
    ("January", "%B"),
    ("Monday", "%A"),
    ("Z07:00", "%z"),
    ("-07:00", "%z"),
    ("-0700", "%z"),
    ("2006", "%Y"),
    (".000000", ".%f"),
    (".000", ".%f"),
    ("Jan", "%b"),
    ("Mon", "%a"),
    ("MST", "%Z"),
    ("01", "%m"),
    ("02", "%d"),
    ("15", "%H"),
    ("03", "%I"),
    ("04", "%M"),
    ("05", "%S"),
    ("06", "%y"),
    ("PM", "%p"),
)
_MAX_HOSTNAME_LENGTH = 253
_NUMBER_MESSAGE = "value must be a valid number"


class ValidatorKind(str, Enum):
    """Supported single-field validator tags."""

    REQUIRED = "required"
    BOOLEAN = "boolean"
    ALPHA = "alpha"
    ALPHA_SPACE = "alphaspace"
    ALPHA_UNICODE = "alphaunicode"
    NUMERIC = "numeric"
    NUMBER = "number"
    ALPHANUMERIC = "alphanumeric"
    ALPHANUMERIC_UNICODE = "alphanumunicode"
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    MIN = "min"
    MAX = "max"
    LEN = "len"
    ONE_OF = "oneof"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    ASCII = "ascii"
    PRINT_ASCII = "printascii"
    EMAIL = "email"
    URI = "uri"
    URL = "url"
    HTTP_URL = "http_url"
    HTTPS_URL = "https_url"
    URL_ENCODED = "url_encoded"
    DATA_URI = "datauri"
    IP_ADDR = "ip_addr"
    IP4_ADDR = "ip4_addr"
    IP6_ADDR = "ip6_addr"
    CIDR = "cidr"
    CIDRV4 = "cidrv4"
    CIDRV6 = "cidrv6"
    UUID = "uuid"
    UUID3 = "uuid3"
    UUID4 = "uuid4"
    UUID5 = "uuid5"
    ULID = "ulid"
    FQDN = "fqdn"
    HOSTNAME = "hostname"
    HOSTNAME_RFC1123 = "hostname_rfc1123"
    HOSTNAME_PORT = "hostname_port"
    STARTS_WITH = "startswith"
    STARTS_NOT_WITH = "startsnotwith"
    ENDS_WITH = "endswith"
    ENDS_NOT_WITH = "endsnotwith"
    CONTAINS = "contains"
    CONTAINS_ANY = "containsany"
    CONTAINS_RUNE = "containsrune"
    EXCLUDES = "excludes"
    EXCLUDES_ALL = "excludesall"
    EXCLUDES_RUNE = "excludesrune"
    MULTIBYTE = "multibyte"
    EQ_IGNORE_CASE = "eq_ignore_case"
    NE_IGNORE_CASE = "ne_ignore_case"
    DATETIME = "datetime"
    E164 = "e164"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    HEXADECIMAL = "hexadecimal"
    HEX_COLOR = "hexcolor"
    RGB = "rgb"
    RGBA = "rgba"
    HSL = "hsl"
    HSLA = "hsla"
    MAC = "mac"


@dataclass(frozen=True)
class Validator:
    """Compiled single-field validator.

    Attributes:
        kind: Validator tag.
        params: Parsed tag arguments, shape depends on ``kind``.
    """

    kind: ValidatorKind
    params: tuple[Any, ...] = ()

    @property
    def tag(self) -> str:
        """Return the tag name reported in validation errors."""
        return self.kind.value


def build_validator(kind: ValidatorKind, argument: str) -> Validator:
    """Compile one validator tag token.

    Args:
        kind: Validator tag.
        argument: Text after ``=`` in the token, empty when absent.

    Returns:
        Compiled validator.

    Raises:
        ValueError: If the argument is missing or malformed.
    """
    builder = _ARGUMENT_BUILDERS.get(kind)
    if builder is None:
        return Validator(kind=kind)
    return Validator(kind=kind, params=builder(argument))


def check_value(validator: Validator, value: str) -> str | None:
    """Evaluate a validator against a value.

    Args:
        validator: Compiled validator.
        value: Value under test.

    Returns:
        Failure message, or None when the value passes.
    """
    return _HANDLERS[validator.kind](value, *validator.params)


def _parse_threshold(argument: str) -> tuple[float]:
    return (parse_float(argument),)


def _parse_length(argument: str) -> tuple[int]:
    try:
        return (int(argument),)
    except ValueError as error:
        raise ValueError(f"expected an integer length, got {argument!r}") from error


def _require_text(argument: str) -> tuple[str]:
    if argument == "":
        raise ValueError("expected a non-empty argument")
    return (argument,)


def _require_words(argument: str) -> tuple[tuple[str, ...]]:
    words = tuple(argument.split())
    if not words:
        raise ValueError("expected space-separated values")
    return (words,)


def _require_character(argument: str) -> tuple[str]:
    return (_require_text(argument)[0][0],)


def _compile_datetime_layout(argument: str) -> tuple[str, str]:
    layout = _require_text(argument)[0]
    if "%" in layout:
        return layout, layout
    return layout, _translate_reference_layout(layout)


def _translate_reference_layout(layout: str) -> str:
    """Translate a reference-time layout such as ``2006-01-02`` into a strptime pattern."""
    pieces: list[str] = []
    index = 0
    while index < len(layout):
        for token, directive in _REFERENCE_LAYOUT_TOKENS:
            if layout.startswith(token, index):
                pieces.append(directive)
                index += len(token)
                break
        else:
            character = layout[index]
            pieces.append("%%" if character == "%" else character)
            index += 1
    return "".join(pieces)


def _message_if(failed: bool, message: str) -> str | None:
    return message if failed else None


def _is_ascii_letter(character: str) -> bool:
    return "a" <= character <= "z" or "A" <= character <= "Z"


def _is_ascii_digit(character: str) -> bool:
    return "0" <= character <= "9"


def _compare_number(value: str, threshold: float, passes: Callable[[float, float], bool], phrase: str) -> str | None:
    try:
        number = parse_float(value)
    except ValueError:
        return _NUMBER_MESSAGE
    return _message_if(not passes(number, threshold), f"value must {phrase} {format_plain_float(threshold)}")


def _numeric_threshold(phrase: str, passes: Callable[[float, float], bool]) -> Callable[[str, float], str | None]:
    def _check(value: str, threshold: float) -> str | None:
        return _compare_number(value, threshold, passes, phrase)

    return _check


def _check_boolean(value: str) -> str | None:
    return _message_if(
        value not in ("true", "false", "0", "1"),
        "value must be a boolean (true, false, 0, or 1)",
    )


def _check_numeric(value: str) -> str | None:
    if value == "":
        return None
    return _message_if(not _NUMERIC_PATTERN.fullmatch(value), "value must be numeric")


def _check_one_of(value: str, allowed: tuple[str, ...]) -> str | None:
    return _message_if(value not in allowed, f"value must be one of: {', '.join(allowed)}")


def _check_uri(value: str) -> str | None:
    message = "value must be a valid URI"
    request_uri = value.split("#", 1)[0]
    if request_uri == "":
        return message
    if request_uri.startswith("/"):
        return None
    parts = _split_url(request_uri)
    return _message_if(parts is None or not parts.scheme, message)


def _check_url(value: str) -> str | None:
    message = "value must be a valid URL"
    parts = _split_url(value.lower())
    if parts is None or not parts.scheme:
        return message
    if parts.scheme == "file":
        return _message_if(parts.path in ("", "/"), message)
    has_opaque = not parts.netloc and parts.path and not parts.path.startswith("/")
    return _message_if(not parts.netloc and not parts.fragment and not has_opaque, message)


def _check_http_url(value: str, schemes: tuple[str, ...], message: str) -> str | None:
    parts = _split_url(value.lower())
    return _message_if(parts is None or not parts.netloc or parts.scheme not in schemes, message)


def _split_url(value: str) -> Any:
    try:
        return urlsplit(value)
    except ValueError:
        return None


def _check_data_uri(value: str) -> str | None:
    message = "value must be a valid data URI"
    if not _DATA_URI_PATTERN.fullmatch(value):
        return message
    payload = value.split(",", 1)[1]
    try:
        base64.b64decode(payload, validate=True)
    except binascii.Error:
        return message
    return None


def _check_ip(value: str, version: int | None, message: str) -> str | None:
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return message
    if version is None:
        return None
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return _message_if(version != 4, message)
    return _message_if(address.version != version, message)


def _check_cidr(value: str, version: int | None, message: str) -> str | None:
    address_text, separator, _ = value.partition("/")
    if not separator:
        return message
    try:
        ipaddress.ip_network(value, strict=False)
    except ValueError:
        return message
    return _check_ip(address_text, version, message)


def _check_fqdn(value: str) -> str | None:
    message = "value must be a valid FQDN"
    if value.startswith(".") or value.endswith("."):
        return message
    labels = value.split(".")
    if len(labels) < 2:
        return message
    return _check_labels(labels, _FQDN_LABEL_PATTERN, message)


def _check_hostname(value: str, label_pattern: re.Pattern[str], message: str) -> str | None:
    if value.startswith(".") or value.endswith("."):
        return message
    return _check_labels(value.split("."), label_pattern, message)


def _check_labels(labels: list[str], label_pattern: re.Pattern[str], message: str) -> str | None:
    if not all(label_pattern.fullmatch(label) for label in labels):
        return message
    total_length = sum(len(label) + 1 for label in labels) - 1
    return _message_if(total_length > _MAX_HOSTNAME_LENGTH, message)


def _check_hostname_port(value: str) -> str | None:
    message = "value must be a valid hostname:port"
    host, separator, port_text = value.rpartition(":")
    if not separator or not _NUMERIC_PATTERN.fullmatch(port_text) or port_text[0] in "+-":
        return message
    if not 1 <= int(port_text) <= 65535:
        return message
    if host.startswith("[") and host.endswith("]"):
        return _check_ip(host[1:-1], None, message)
    if ":" in host:
        return message
    if _check_ip(host, None, message) is None:
        return None
    return _check_hostname(host, _RFC1123_LABEL_PATTERN, message)


def _check_contains_any(value: str, needles: tuple[str, ...]) -> str | None:
    return _message_if(
        not any(needle in value for needle in needles),
        f"value must contain one of: {', '.join(needles)}",
    )


def _check_excludes_all(value: str, characters: str) -> str | None:
    if value == "":
        return None
    return _message_if(
        any(character in value for character in characters),
        f"value must not contain any of: {characters}",
    )


def _check_multibyte(value: str) -> str | None:
    return _message_if(value == "" or value.isascii(), "value must contain multibyte characters")


def _check_datetime(value: str, layout: str, pattern: str) -> str | None:
    if value == "":
        return None
    try:
        datetime.strptime(value, pattern)
    except ValueError:
        return f"value must be a valid datetime in format: {layout}"
    return None


def _check_optional_pattern(value: str, pattern: re.Pattern[str], message: str) -> str | None:
    if value == "":
        return None
    return _message_if(not pattern.fullmatch(value), message)


def _check_pattern(value: str, pattern: re.Pattern[str], message: str) -> str | None:
    return _message_if(not pattern.fullmatch(value), message)


def _check_mac(value: str) -> str | None:
    if value == "":
        return None
    return _message_if(
        not any(pattern.fullmatch(value) for pattern in _MAC_PATTERNS),
        "value must be a valid MAC address",
    )


_ARGUMENT_BUILDERS: dict[ValidatorKind, Callable[[str], tuple[Any, ...]]] = {
    ValidatorKind.EQ: _parse_threshold,
    ValidatorKind.NE: _parse_threshold,
    ValidatorKind.GT: _parse_threshold,
    ValidatorKind.GTE: _parse_threshold,
    ValidatorKind.LT: _parse_threshold,
    ValidatorKind.LTE: _parse_threshold,
    ValidatorKind.MIN: _parse_threshold,
    ValidatorKind.MAX: _parse_threshold,
    ValidatorKind.LEN: _parse_length,
    ValidatorKind.ONE_OF: _require_words,
    ValidatorKind.STARTS_WITH: _require_text,
    ValidatorKind.STARTS_NOT_WITH: _require_text,
    ValidatorKind.ENDS_WITH: _require_text,
    ValidatorKind.ENDS_NOT_WITH: _require_text,
    ValidatorKind.CONTAINS: _require_text,
    ValidatorKind.CONTAINS_ANY: _require_words,
    ValidatorKind.CONTAINS_RUNE: _require_character,
    ValidatorKind.EXCLUDES: _require_text,
    ValidatorKind.EXCLUDES_ALL: _require_text,
    ValidatorKind.EXCLUDES_RUNE: _require_character,
    ValidatorKind.EQ_IGNORE_CASE: _require_text,
    ValidatorKind.NE_IGNORE_CASE: _require_text,
    ValidatorKind.DATETIME: _compile_datetime_layout,
}

_HANDLERS: dict[ValidatorKind, Callable[..., str | None]] = {
    ValidatorKind.REQUIRED: lambda value: _message_if(value == "", "value is required"),
    ValidatorKind.BOOLEAN: _check_boolean,
    ValidatorKind.ALPHA: lambda value: _message_if(
        not all(_is_ascii_letter(char) for char in value),
        "value must contain only alphabetic characters",
    ),
    ValidatorKind.ALPHA_SPACE: lambda value: _message_if(
        not all(_is_ascii_letter(char) or char == " " for char in value),
        "value must contain only alphabetic characters or spaces",
    ),
    ValidatorKind.ALPHA_UNICODE: lambda value: _message_if(
        not all(char.isalpha() for char in value),
        "value must contain only unicode letters",
    ),
    ValidatorKind.NUMERIC: _check_numeric,
    ValidatorKind.NUMBER: lambda value: _check_pattern(value, _NUMBER_PATTERN, _NUMBER_MESSAGE),
    ValidatorKind.ALPHANUMERIC: lambda value: _message_if(
        not all(_is_ascii_letter(char) or _is_ascii_digit(char) for char in value),
        "value must contain only alphanumeric characters",
    ),
    ValidatorKind.ALPHANUMERIC_UNICODE: lambda value: _message_if(
        not all(char.isalpha() or char.isdecimal() for char in value),
        "value must contain only unicode letters or digits",
    ),
    ValidatorKind.EQ: _numeric_threshold("equal", lambda number, limit: number == limit),
    ValidatorKind.NE: _numeric_threshold("not equal", lambda number, limit: number != limit),
    ValidatorKind.GT: _numeric_threshold("be greater than", lambda number, limit: number > limit),
    ValidatorKind.GTE: _numeric_threshold(
        "be greater than or equal to", lambda number, limit: number >= limit
    ),
    ValidatorKind.LT: _numeric_threshold("be less than", lambda number, limit: number < limit),
    ValidatorKind.LTE: _numeric_threshold(
        "be less than or equal to", lambda number, limit: number <= limit
    ),
    ValidatorKind.MIN: _numeric_threshold("be at least", lambda number, limit: number >= limit),
    ValidatorKind.MAX: _numeric_threshold("be at most", lambda number, limit: number <= limit),
    ValidatorKind.LEN: lambda value, length: _message_if(
        len(value) != length, f"value must have exactly {length} characters"
    ),
    ValidatorKind.ONE_OF: _check_one_of,
    ValidatorKind.LOWERCASE: lambda value: _message_if(value != value.lower(), "value must be lowercase"),
    ValidatorKind.UPPERCASE: lambda value: _message_if(value != value.upper(), "value must be uppercase"),
    ValidatorKind.ASCII: lambda value: _message_if(
        not value.isascii(), "value must contain only ASCII characters"
    ),
    ValidatorKind.PRINT_ASCII: lambda value: _message_if(
        not all(" " <= char <= "~" for char in value),
        "value must contain only printable ASCII characters",
    ),
    ValidatorKind.EMAIL: lambda value: _check_pattern(
        value, _EMAIL_PATTERN, "value must be a valid email address"
    ),
    ValidatorKind.URI: _check_uri,
    ValidatorKind.URL: _check_url,
    ValidatorKind.HTTP_URL: lambda value: _check_http_url(
        value, ("http", "https"), "value must be a valid HTTP URL"
    ),
    ValidatorKind.HTTPS_URL: lambda value: _check_http_url(
        value, ("https",), "value must be a valid HTTPS URL"
    ),
    ValidatorKind.URL_ENCODED: lambda value: _check_pattern(
        value, _URL_ENCODED_PATTERN, "value must be URL encoded"
    ),
    ValidatorKind.DATA_URI: _check_data_uri,
    ValidatorKind.IP_ADDR: lambda value: _check_ip(value, None, "value must be a valid IP address"),
    ValidatorKind.IP4_ADDR: lambda value: _check_ip(value, 4, "value must be a valid IPv4 address"),
    ValidatorKind.IP6_ADDR: lambda value: _check_ip(value, 6, "value must be a valid IPv6 address"),
    ValidatorKind.CIDR: lambda value: _check_cidr(value, None, "value must be a valid CIDR"),
    ValidatorKind.CIDRV4: lambda value: _check_cidr(value, 4, "value must be a valid IPv4 CIDR"),
    ValidatorKind.CIDRV6: lambda value: _check_cidr(value, 6, "value must be a valid IPv6 CIDR"),
    ValidatorKind.UUID: lambda value: _check_pattern(value, _UUID_PATTERN, "value must be a valid UUID"),
    ValidatorKind.UUID3: lambda value: _check_pattern(
        value, _UUID_VERSION_PATTERNS[3], "value must be a valid UUID version 3"
    ),
    ValidatorKind.UUID4: lambda value: _check_pattern(
        value, _UUID_VERSION_PATTERNS[4], "value must be a valid UUID version 4"
    ),
    ValidatorKind.UUID5: lambda value: _check_pattern(
        value, _UUID_VERSION_PATTERNS[5], "value must be a valid UUID version 5"
    ),
    ValidatorKind.ULID: lambda value: _check_pattern(value, _ULID_PATTERN, "value must be a valid ULID"),
    ValidatorKind.FQDN: _check_fqdn,
    ValidatorKind.HOSTNAME: lambda value: _check_hostname(
        value, _RFC952_LABEL_PATTERN, "value must be a valid hostname"
    ),
    ValidatorKind.HOSTNAME_RFC1123: lambda value: _check_hostname(
        value, _RFC1123_LABEL_PATTERN, "value must be a valid hostname (RFC 1123)"
    ),
    ValidatorKind.HOSTNAME_PORT: _check_hostname_port,
    ValidatorKind.STARTS_WITH: lambda value, prefix: _message_if(
        not value.startswith(prefix), f"value must start with '{prefix}'"
    ),
    ValidatorKind.STARTS_NOT_WITH: lambda value, prefix: _message_if(
        value.startswith(prefix), f"value must not start with '{prefix}'"
    ),
    ValidatorKind.ENDS_WITH: lambda value, suffix: _message_if(
        not value.endswith(suffix), f"value must end with '{suffix}'"
    ),
    ValidatorKind.ENDS_NOT_WITH: lambda value, suffix: _message_if(
        value.endswith(suffix), f"value must not end with '{suffix}'"
    ),
    ValidatorKind.CONTAINS: lambda value, needle: _message_if(
        needle not in value, f"value must contain '{needle}'"
    ),
    ValidatorKind.CONTAINS_ANY: _check_contains_any,
    ValidatorKind.CONTAINS_RUNE: lambda value, character: _message_if(
        character not in value, f"value must contain character '{character}'"
    ),
    ValidatorKind.EXCLUDES: lambda value, needle: _message_if(
        needle in value, f"value must not contain '{needle}'"
    ),
    ValidatorKind.EXCLUDES_ALL: _check_excludes_all,
    ValidatorKind.EXCLUDES_RUNE: lambda value, character: _message_if(
        character in value, f"value must not contain character '{character}'"
    ),
    ValidatorKind.MULTIBYTE: _check_multibyte,
    ValidatorKind.EQ_IGNORE_CASE: lambda value, expected: _message_if(
        value.casefold() != expected.casefold(), f"value must equal '{expected}' (case insensitive)"
    ),
    ValidatorKind.NE_IGNORE_CASE: lambda value, expected: _message_if(
        value.casefold() == expected.casefold(), f"value must not equal '{expected}' (case insensitive)"
    ),
    ValidatorKind.DATETIME: _check_datetime,
    ValidatorKind.E164: lambda value: _check_optional_pattern(
        value, _E164_PATTERN, "value must be a valid E.164 phone number"
    ),
    ValidatorKind.LATITUDE: lambda value: _check_optional_pattern(
        value, _LATITUDE_PATTERN, "value must be a valid latitude (-90 to 90)"
    ),
    ValidatorKind.LONGITUDE: lambda value: _check_optional_pattern(
        value, _LONGITUDE_PATTERN, "value must be a valid longitude (-180 to 180)"
    ),
    ValidatorKind.HEXADECIMAL: lambda value: _check_optional_pattern(
        value, _HEXADECIMAL_PATTERN, "value must be a valid hexadecimal"
    ),
    ValidatorKind.HEX_COLOR: lambda value: _check_optional_pattern(
        value, _HEX_COLOR_PATTERN, "value must be a valid hex color"
    ),
    ValidatorKind.RGB: lambda value: _check_optional_pattern(
        value, _RGB_PATTERN, "value must be a valid RGB color"
    ),
    ValidatorKind.RGBA: lambda value: _check_optional_pattern(
        value, _RGBA_PATTERN, "value must be a valid RGBA color"
    ),
    ValidatorKind.HSL: lambda value: _check_optional_pattern(
        value, _HSL_PATTERN, "value must be a valid HSL color"
    ),
    ValidatorKind.HSLA: lambda value: _check_optional_pattern(
        value, _HSLA_PATTERN, "value must be a valid HSLA color"
    ),
    ValidatorKind.MAC: _check_mac,
}
