"""Cross-field validators.

These rules compare a field's preprocessed value against another field of
the same row. Targets are referenced by field identifier and resolved to
schema positions when the schema is compiled.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from transforms.coercion import parse_float


class CrossFieldKind(str, Enum):
    """Supported cross-field validator tags."""

    EQ_FIELD = "eqfield"
    NE_FIELD = "nefield"
    GT_FIELD = "gtfield"
    GTE_FIELD = "gtefield"
    LT_FIELD = "ltfield"
    LTE_FIELD = "ltefield"
    FIELD_CONTAINS = "fieldcontains"
    FIELD_EXCLUDES = "fieldexcludes"
    REQUIRED_IF = "required_if"
    REQUIRED_UNLESS = "required_unless"
    REQUIRED_WITH = "required_with"
    REQUIRED_WITHOUT = "required_without"


_CONDITIONAL_KINDS = (CrossFieldKind.REQUIRED_IF, CrossFieldKind.REQUIRED_UNLESS)


@dataclass(frozen=True)
class CrossFieldRule:
    """Compiled cross-field validator.

    Attributes:
        kind: Validator tag.
        target_field: Referenced field identifier.
        expected_value: Comparison value for required_if/required_unless.
        target_index: Schema position of the target, None when the schema
            has no such field.
    """

    kind: CrossFieldKind
    target_field: str
    expected_value: str = ""
    target_index: int | None = None

    @property
    def tag(self) -> str:
        """Return the tag name reported in validation errors."""
        return self.kind.value

    def resolved(self, target_index: int | None) -> "CrossFieldRule":
        """Return a copy bound to the target's schema position."""
        return replace(self, target_index=target_index)


def build_cross_field_rule(kind: CrossFieldKind, argument: str) -> CrossFieldRule:
    """Compile one cross-field tag token.

    Args:
        kind: Cross-field tag.
        argument: ``Field`` or, for conditional tags, ``Field value``.

    Returns:
        Unresolved cross-field rule.

    Raises:
        ValueError: If no target field is named.
    """
    if kind in _CONDITIONAL_KINDS:
        target_field, _, expected_value = argument.partition(" ")
    else:
        target_field, expected_value = argument, ""
    if target_field == "":
        raise ValueError("expected a target field name")
    return CrossFieldRule(kind=kind, target_field=target_field, expected_value=expected_value)


def check_cross_field(rule: CrossFieldRule, source_value: str, target_value: str) -> str | None:
    """Evaluate a cross-field rule.

    Args:
        rule: Compiled rule.
        source_value: Preprocessed value of the field owning the rule.
        target_value: Preprocessed value of the target field.

    Returns:
        Failure message, or None when the pair passes.
    """
    return _HANDLERS[rule.kind](rule, source_value, target_value)


def _ordered(passes: Callable[[float | str, float | str], bool], phrase: str) -> Callable[..., str | None]:
    """Build a comparison that is numeric when both sides parse, else lexical."""

    def _check(rule: CrossFieldRule, source_value: str, target_value: str) -> str | None:
        try:
            left: float | str = parse_float(source_value)
            right: float | str = parse_float(target_value)
        except ValueError:
            left, right = source_value, target_value
        if passes(left, right):
            return None
        return f"value must be {phrase} field {rule.target_field}"

    return _check


def _required_when(condition: Callable[[CrossFieldRule, str], bool], clause: str) -> Callable[..., str | None]:
    def _check(rule: CrossFieldRule, source_value: str, target_value: str) -> str | None:
        if source_value != "" or not condition(rule, target_value):
            return None
        return f"value is required {clause.format(field=rule.target_field, value=rule.expected_value)}"

    return _check


_HANDLERS: dict[CrossFieldKind, Callable[[CrossFieldRule, str, str], str | None]] = {
    CrossFieldKind.EQ_FIELD: lambda rule, source, target: (
        None if source == target else f"value must equal field {rule.target_field}"
    ),
    CrossFieldKind.NE_FIELD: lambda rule, source, target: (
        None if source != target else f"value must not equal field {rule.target_field}"
    ),
    CrossFieldKind.GT_FIELD: _ordered(lambda left, right: left > right, "greater than"),
    CrossFieldKind.GTE_FIELD: _ordered(lambda left, right: left >= right, "greater than or equal to"),
    CrossFieldKind.LT_FIELD: _ordered(lambda left, right: left < right, "less than"),
    CrossFieldKind.LTE_FIELD: _ordered(lambda left, right: left <= right, "less than or equal to"),
    CrossFieldKind.FIELD_CONTAINS: lambda rule, source, target: (
        None if target in source else f"value must contain field {rule.target_field} value"
    ),
    CrossFieldKind.FIELD_EXCLUDES: lambda rule, source, target: (
        None if target not in source else f"value must not contain field {rule.target_field} value"
    ),
    CrossFieldKind.REQUIRED_IF: _required_when(
        lambda rule, target: target == rule.expected_value, "when field {field} equals '{value}'"
    ),
    CrossFieldKind.REQUIRED_UNLESS: _required_when(
        lambda rule, target: target != rule.expected_value, "unless field {field} equals '{value}'"
    ),
    CrossFieldKind.REQUIRED_WITH: _required_when(
        lambda rule, target: target != "", "when field {field} is present"
    ),
    CrossFieldKind.REQUIRED_WITHOUT: _required_when(
        lambda rule, target: target == "", "when field {field} is absent"
    ),
}
