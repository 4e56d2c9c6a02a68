"""Column name derivation for record fields."""

from __future__ import annotations


def to_snake_case(identifier: str) -> str:
    """Derive the default column name for a field identifier.

    An underscore is inserted before each ASCII uppercase letter that
    follows a lowercase letter or precedes one, then the letter is
    lowercased. ``HTTPServer`` becomes ``http_server`` and ``ID`` becomes
    ``id``; snake_case input is returned unchanged.

    Args:
        identifier: Field identifier.

    Returns:
        Snake case column name.
    """
    pieces: list[str] = []
    for index, character in enumerate(identifier):
        if not "A" <= character <= "Z":
            pieces.append(character)
            continue
        if index > 0:
            after_lower = "a" <= identifier[index - 1] <= "z"
            before_lower = index + 1 < len(identifier) and "a" <= identifier[index + 1] <= "z"
            if after_lower or before_lower:
                pieces.append("_")
        pieces.append(character.lower())
    return "".join(pieces)
