"""Raw JSON text helpers.

JSON cells are carried as raw text so preprocessors see exactly what the
source held. These helpers validate, split, and compact that text without
re-serializing it.
"""

from __future__ import annotations

import json

_JSON_WHITESPACE = " \t\n\r"


def _reject_constant(token: str) -> None:
    raise ValueError(f"non-standard JSON constant {token}")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def is_valid_json(text: str) -> bool:
    """Return whether text is one complete, standard JSON value.

    Args:
        text: Candidate JSON text.

    Returns:
        True when the text parses as strict JSON.
    """
    try:
        _DECODER.decode(text)
    except ValueError:
        return False
    return True


def describe_json_error(text: str) -> str:
    """Return the decoder message for invalid JSON text.

    Args:
        text: JSON text known or suspected to be invalid.

    Returns:
        Decoder error message, or an empty string when text is valid.
    """
    try:
        _DECODER.decode(text)
    except json.JSONDecodeError as error:
        return f"{error.msg} at line {error.lineno} column {error.colno}"
    except ValueError as error:
        return str(error)
    return ""


def split_top_level_elements(text: str) -> list[str]:
    """Split a JSON document into raw element texts.

    A top-level array yields one entry per element; any other value yields
    itself as the single entry.

    Args:
        text: Valid JSON document.

    Returns:
        Raw element texts in document order.

    Raises:
        ValueError: If the document is not valid JSON.
    """
    _DECODER.decode(text)
    stripped = text.strip(_JSON_WHITESPACE)
    if not stripped.startswith("["):
        return [stripped]
    elements: list[str] = []
    index = _skip_whitespace(stripped, 1)
    if stripped[index] == "]":
        return elements
    while True:
        _, end = _DECODER.raw_decode(stripped, index)
        elements.append(stripped[index:end])
        index = _skip_whitespace(stripped, end)
        if stripped[index] == "]":
            return elements
        index = _skip_whitespace(stripped, index + 1)


def compact_json(text: str) -> str:
    """Remove insignificant whitespace outside string literals.

    Token text (number spelling, escapes, key order) is preserved.

    Args:
        text: Valid JSON text.

    Returns:
        Compact JSON text.
    """
    pieces: list[str] = []
    in_string = False
    escaped = False
    for character in text:
        if in_string:
            pieces.append(character)
            if escaped:
                escaped = False
            elif character == "\\":
                escaped = True
            elif character == '"':
                in_string = False
            continue
        if character in _JSON_WHITESPACE:
            continue
        if character == '"':
            in_string = True
        pieces.append(character)
    return "".join(pieces)


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in _JSON_WHITESPACE:
        index += 1
    return index
