"""Cell preprocessors.

Each preprocessor is a pure ``str -> str`` step compiled from one tag
token. Chains run left to right and never fail at row time; argument
problems are reported while the schema is compiled.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import re
from typing import Any, Callable, Sequence
import unicodedata

from core.constants import PAIR_ARGUMENT_SEPARATOR
from transforms.coercion import format_plain_float, parse_float

_HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_RUN_PATTERN = re.compile(r"\s+", re.ASCII)
_GROUP_REFERENCE_PATTERN = re.compile(r"\$(?:(\$)|(\d+)|\{(\w+)\}|([A-Za-z_]\w*))")
_EDGE_WHITESPACE = " \t\n\r"
_BOOL_TRUE_WORDS = ("true", "1", "yes", "on")
_BOOL_FALSE_WORDS = ("false", "0", "no", "off")


class PrepKind(str, Enum):
    """Supported preprocessor tags."""

    TRIM = "trim"
    LTRIM = "ltrim"
    RTRIM = "rtrim"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    DEFAULT = "default"
    REPLACE = "replace"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    TRUNCATE = "truncate"
    STRIP_HTML = "strip_html"
    STRIP_NEWLINE = "strip_newline"
    COLLAPSE_SPACE = "collapse_space"
    REMOVE_DIGITS = "remove_digits"
    REMOVE_ALPHA = "remove_alpha"
    KEEP_DIGITS = "keep_digits"
    KEEP_ALPHA = "keep_alpha"
    TRIM_SET = "trim_set"
    PAD_LEFT = "pad_left"
    PAD_RIGHT = "pad_right"
    NORMALIZE_UNICODE = "normalize_unicode"
    NULLIFY = "nullify"
    COERCE = "coerce"
    FIX_SCHEME = "fix_scheme"
    REGEX_REPLACE = "regex_replace"


@dataclass(frozen=True)
class Preprocessor:
    """Compiled preprocessor step.

    Attributes:
        kind: Preprocessor tag.
        params: Parsed tag arguments, shape depends on ``kind``.
    """

    kind: PrepKind
    params: tuple[Any, ...] = ()


def build_preprocessor(kind: PrepKind, argument: str) -> Preprocessor:
    """Compile one preprocessor tag token.

    Args:
        kind: Preprocessor tag.
        argument: Text after ``=`` in the token, empty when absent.

    Returns:
        Compiled preprocessor.

    Raises:
        ValueError: If the argument is missing or malformed.
    """
    builder = _ARGUMENT_BUILDERS.get(kind)
    if builder is None:
        return Preprocessor(kind=kind)
    return Preprocessor(kind=kind, params=builder(argument))


def apply_preprocessors(chain: Sequence[Preprocessor], value: str) -> str:
    """Run a preprocessor chain over a cell value.

    Args:
        chain: Compiled steps in tag order.
        value: Raw cell text.

    Returns:
        Preprocessed text.
    """
    for step in chain:
        value = _HANDLERS[step.kind](value, *step.params)
    return value


def _require_value(argument: str) -> tuple[str]:
    if argument == "":
        raise ValueError("expected a non-empty argument")
    return (argument,)


def _split_pair(argument: str) -> tuple[str, str]:
    old_text, separator, new_text = argument.partition(PAIR_ARGUMENT_SEPARATOR)
    if not separator:
        raise ValueError(f"expected 'old{PAIR_ARGUMENT_SEPARATOR}new', got {argument!r}")
    return old_text, new_text


def _parse_truncate(argument: str) -> tuple[int]:
    length = _parse_positive_int(argument)
    return (length,)


def _parse_padding(argument: str) -> tuple[int, str]:
    length_text, _, pad_text = argument.partition(PAIR_ARGUMENT_SEPARATOR)
    length = _parse_positive_int(length_text)
    return length, pad_text[:1] or " "


def _parse_positive_int(text: str) -> int:
    try:
        length = int(text)
    except ValueError as error:
        raise ValueError(f"expected a positive integer, got {text!r}") from error
    if length <= 0:
        raise ValueError(f"expected a positive integer, got {text!r}")
    return length


def _parse_coerce_target(argument: str) -> tuple[str]:
    if argument not in ("int", "float", "bool"):
        raise ValueError(f"expected int, float, or bool, got {argument!r}")
    return (argument,)


def _parse_regex_replace(argument: str) -> tuple[re.Pattern[str], str]:
    pattern_text, replacement = _split_pair(argument)
    try:
        pattern = re.compile(pattern_text)
    except re.error as error:
        raise ValueError(f"invalid regular expression {pattern_text!r}: {error}") from error
    return pattern, _to_python_template(pattern, replacement)


def _to_python_template(pattern: re.Pattern[str], replacement: str) -> str:
    """Translate ``$1``/``${name}`` group references into ``re.sub`` syntax.

    References to groups the pattern does not define expand to nothing.
    """
    escaped = replacement.replace("\\", "\\\\")

    def _convert(match: re.Match[str]) -> str:
        if match.group(1):
            return "$"
        group_name = match.group(2) or match.group(3) or match.group(4)
        if group_name.isdigit() and int(group_name) <= pattern.groups:
            return f"\\g<{group_name}>"
        if group_name in pattern.groupindex:
            return f"\\g<{group_name}>"
        return ""

    return _GROUP_REFERENCE_PATTERN.sub(_convert, escaped)


def _default(value: str, fallback: str) -> str:
    return fallback if value.strip() == "" else value


def _truncate(value: str, length: int) -> str:
    return value[:length]


def _strip_newline(value: str) -> str:
    return value.replace("\r", "").replace("\n", "")


def _pad_left(value: str, length: int, pad_character: str) -> str:
    return value.rjust(length, pad_character)


def _pad_right(value: str, length: int, pad_character: str) -> str:
    return value.ljust(length, pad_character)


def _nullify(value: str, null_marker: str) -> str:
    return "" if value == null_marker else value


def _coerce(value: str, target: str) -> str:
    trimmed = value.strip()
    if trimmed == "":
        return value
    if target == "bool":
        lowered = trimmed.lower()
        if lowered in _BOOL_TRUE_WORDS:
            return "true"
        if lowered in _BOOL_FALSE_WORDS:
            return "false"
        return value
    try:
        parsed = parse_float(trimmed)
    except ValueError:
        return value
    if target == "float":
        return format_plain_float(parsed)
    if not math.isfinite(parsed):
        return value
    return str(int(parsed))


def _fix_scheme(value: str, scheme: str) -> str:
    trimmed = value.strip()
    if trimmed == "":
        return value
    if trimmed.startswith("http://"):
        if scheme == "https":
            return "https://" + trimmed[len("http://"):]
        return trimmed
    if trimmed.startswith("https://"):
        return trimmed
    return f"{scheme}://{trimmed}"


def _regex_replace(value: str, pattern: re.Pattern[str], template: str) -> str:
    return pattern.sub(template, value)


_ARGUMENT_BUILDERS: dict[PrepKind, Callable[[str], tuple[Any, ...]]] = {
    PrepKind.DEFAULT: lambda argument: (argument,),
    PrepKind.REPLACE: _split_pair,
    PrepKind.PREFIX: _require_value,
    PrepKind.SUFFIX: _require_value,
    PrepKind.TRUNCATE: _parse_truncate,
    PrepKind.TRIM_SET: _require_value,
    PrepKind.PAD_LEFT: _parse_padding,
    PrepKind.PAD_RIGHT: _parse_padding,
    PrepKind.NULLIFY: _require_value,
    PrepKind.COERCE: _parse_coerce_target,
    PrepKind.FIX_SCHEME: _require_value,
    PrepKind.REGEX_REPLACE: _parse_regex_replace,
}

_HANDLERS: dict[PrepKind, Callable[..., str]] = {
    PrepKind.TRIM: str.strip,
    PrepKind.LTRIM: lambda value: value.lstrip(_EDGE_WHITESPACE),
    PrepKind.RTRIM: lambda value: value.rstrip(_EDGE_WHITESPACE),
    PrepKind.LOWERCASE: str.lower,
    PrepKind.UPPERCASE: str.upper,
    PrepKind.DEFAULT: _default,
    PrepKind.REPLACE: lambda value, old, new: value.replace(old, new),
    PrepKind.PREFIX: lambda value, prefix: prefix + value,
    PrepKind.SUFFIX: lambda value, suffix: value + suffix,
    PrepKind.TRUNCATE: _truncate,
    PrepKind.STRIP_HTML: lambda value: _HTML_TAG_PATTERN.sub("", value),
    PrepKind.STRIP_NEWLINE: _strip_newline,
    PrepKind.COLLAPSE_SPACE: lambda value: _WHITESPACE_RUN_PATTERN.sub(" ", value),
    PrepKind.REMOVE_DIGITS: lambda value: "".join(char for char in value if not char.isdecimal()),
    PrepKind.REMOVE_ALPHA: lambda value: "".join(char for char in value if not char.isalpha()),
    PrepKind.KEEP_DIGITS: lambda value: "".join(char for char in value if char.isdecimal()),
    PrepKind.KEEP_ALPHA: lambda value: "".join(char for char in value if char.isalpha()),
    PrepKind.TRIM_SET: lambda value, characters: value.strip(characters),
    PrepKind.PAD_LEFT: _pad_left,
    PrepKind.PAD_RIGHT: _pad_right,
    PrepKind.NORMALIZE_UNICODE: lambda value: unicodedata.normalize("NFC", value),
    PrepKind.NULLIFY: _nullify,
    PrepKind.COERCE: _coerce,
    PrepKind.FIX_SCHEME: _fix_scheme,
    PrepKind.REGEX_REPLACE: _regex_replace,
}
