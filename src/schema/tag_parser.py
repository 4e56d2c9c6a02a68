"""Tag string tokenizer.

Tag strings are comma-separated tokens, each ``name`` or ``name=value``.
Only the first ``=`` splits, so values may contain ``=`` themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import TAG_ARGUMENT_SEPARATOR, TAG_SEPARATOR


@dataclass(frozen=True)
class TagToken:
    """One parsed tag token.

    Attributes:
        name: Rule name before the first ``=``.
        argument: Text after the first ``=``, empty when absent.
        raw: Token text as written, used in error messages.
    """

    name: str
    argument: str
    raw: str


def split_tag(tag: str) -> list[TagToken]:
    """Tokenize a tag string.

    Blank tokens (e.g. from trailing commas) are ignored and each token is
    stripped of surrounding whitespace. A token starting with ``=`` is
    treated as a bare name.

    Args:
        tag: Comma-separated tag string.

    Returns:
        Tokens in written order.
    """
    tokens: list[TagToken] = []
    for part in tag.split(TAG_SEPARATOR):
        raw = part.strip()
        if not raw:
            continue
        separator_index = raw.find(TAG_ARGUMENT_SEPARATOR)
        if separator_index > 0:
            tokens.append(
                TagToken(
                    name=raw[:separator_index],
                    argument=raw[separator_index + 1:],
                    raw=raw,
                )
            )
        else:
            tokens.append(TagToken(name=raw, argument="", raw=raw))
    return tokens
