"""Record schema compiler.

This module introspects a target record type once and produces an
immutable schema of field rules. Compiled schemas are cached per target
and tag strictness, so repeated processing calls share them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass, replace
from functools import lru_cache
import typing
from typing import Any, Callable, Sequence

from core.constants import TAG_NAME_KEY, TAG_PREP_KEY, TAG_VALIDATE_KEY
from core.errors import SiftRecordTypeError, SiftTagFormatError
from core.logging_config import get_logger
from core.types import (
    BOOL_TYPE,
    SEMANTIC_TYPE_NAMES,
    STRING_TYPE,
    UNSUPPORTED_TYPE,
    FieldSpec,
    SemanticType,
)
from schema.field_names import to_snake_case
from schema.tag_parser import TagToken, split_tag
from transforms.cross_field import CrossFieldKind, CrossFieldRule, build_cross_field_rule
from transforms.preprocessors import PrepKind, Preprocessor, build_preprocessor
from transforms.validators import ValidatorKind, Validator, build_validator

_LOGGER = get_logger(__name__)

_PLAIN_TYPES: dict[Any, SemanticType] = {
    str: STRING_TYPE,
    bool: BOOL_TYPE,
    int: SEMANTIC_TYPE_NAMES["int64"],
    float: SEMANTIC_TYPE_NAMES["float64"],
}


@dataclass(frozen=True)
class FieldRule:
    """Compiled rules for one record field.

    Attributes:
        identifier: Field identifier.
        column: Column name the field binds to.
        semantic_type: Target type for coercion.
        preprocessors: Preprocessor chain in tag order.
        validators: Single-field validators in tag order.
        cross_field_rules: Cross-field validators in tag order.
    """

    identifier: str
    column: str
    semantic_type: SemanticType
    preprocessors: tuple[Preprocessor, ...] = ()
    validators: tuple[Validator, ...] = ()
    cross_field_rules: tuple[CrossFieldRule, ...] = ()


@dataclass(frozen=True)
class RecordSchema:
    """Immutable compiled description of a record type.

    Attributes:
        type_name: Display name of the target.
        fields: Field rules in declaration order.
        record_factory: Builds one record from ``{identifier: value}``.
    """

    type_name: str
    fields: tuple[FieldRule, ...]
    record_factory: Callable[[dict[str, Any]], Any]


@dataclass(frozen=True)
class _FieldDescriptor:
    identifier: str
    column: str | None
    semantic_type: SemanticType
    prep: str
    validate: str


def compile_schema(target: Any, strict: bool = False) -> RecordSchema:
    """Compile (or fetch from cache) the schema for a target.

    Args:
        target: Dataclass type, or a sequence of ``FieldSpec``.
        strict: Raise on unknown or malformed tag tokens instead of
            dropping them.

    Returns:
        Compiled record schema.

    Raises:
        SiftRecordTypeError: If target is not a record type description.
        SiftTagFormatError: In strict mode, for invalid tag tokens.
    """
    if isinstance(target, type) and is_dataclass(target):
        return _compile_cached(target, strict)
    if _is_field_spec_sequence(target):
        return _compile_cached(tuple(target), strict)
    raise SiftRecordTypeError(
        f"Cannot process into target {target!r}: expected a dataclass type "
        "or a sequence of FieldSpec. Pass the record class itself, not an instance."
    )


def clear_schema_cache() -> None:
    """Drop all cached schemas."""
    _compile_cached.cache_clear()


@lru_cache(maxsize=None)
def _compile_cached(target: Any, strict: bool) -> RecordSchema:
    if isinstance(target, tuple):
        descriptors = [_describe_field_spec(spec) for spec in target]
        type_name = "FieldSpec"
        record_factory: Callable[[dict[str, Any]], Any] = dict
    else:
        descriptors = _describe_dataclass(target)
        type_name = target.__name__
        record_factory = _dataclass_factory(target)
    field_rules = [_compile_field(descriptor, strict) for descriptor in descriptors]
    schema = RecordSchema(
        type_name=type_name,
        fields=tuple(_resolve_cross_field_targets(field_rules)),
        record_factory=record_factory,
    )
    _LOGGER.info(
        "schema_compiled",
        record_type=type_name,
        field_count=len(schema.fields),
        strict=strict,
    )
    return schema


def _is_field_spec_sequence(target: Any) -> bool:
    if isinstance(target, (str, bytes)) or not isinstance(target, Sequence):
        return False
    return bool(target) and all(isinstance(item, FieldSpec) for item in target)


def _describe_dataclass(target: type) -> list[_FieldDescriptor]:
    """Read identifiers, types, and tag metadata from a dataclass.

    Args:
        target: Dataclass type.

    Returns:
        Field descriptors in declaration order, skipping ``init=False``.

    Raises:
        SiftRecordTypeError: If annotations cannot be resolved.
    """
    try:
        hints = typing.get_type_hints(target, include_extras=True)
    except (NameError, TypeError) as error:
        raise SiftRecordTypeError(
            f"Cannot resolve field annotations of {target.__name__}: {error}. "
            "Import every annotated type at module level."
        ) from error
    descriptors: list[_FieldDescriptor] = []
    for dataclass_field in fields(target):
        if not dataclass_field.init:
            continue
        metadata = dataclass_field.metadata
        descriptors.append(
            _FieldDescriptor(
                identifier=dataclass_field.name,
                column=metadata.get(TAG_NAME_KEY) or None,
                semantic_type=_semantic_type_of(hints.get(dataclass_field.name)),
                prep=metadata.get(TAG_PREP_KEY, ""),
                validate=metadata.get(TAG_VALIDATE_KEY, ""),
            )
        )
    return descriptors


def _describe_field_spec(spec: FieldSpec) -> _FieldDescriptor:
    return _FieldDescriptor(
        identifier=spec.identifier,
        column=spec.column or None,
        semantic_type=SEMANTIC_TYPE_NAMES.get(spec.semantic_type.strip().lower(), UNSUPPORTED_TYPE),
        prep=spec.prep,
        validate=spec.validate,
    )


def _semantic_type_of(annotation: Any) -> SemanticType:
    """Map a resolved annotation to its semantic type."""
    if typing.get_origin(annotation) is typing.Annotated:
        for marker in annotation.__metadata__:
            if isinstance(marker, SemanticType):
                return marker
        annotation = typing.get_args(annotation)[0]
    return _PLAIN_TYPES.get(annotation, UNSUPPORTED_TYPE)


def _dataclass_factory(target: type) -> Callable[[dict[str, Any]], Any]:
    def _build(values: dict[str, Any]) -> Any:
        return target(**values)

    return _build


def _compile_field(descriptor: _FieldDescriptor, strict: bool) -> FieldRule:
    preprocessors: list[Preprocessor] = []
    validators: list[Validator] = []
    cross_field_rules: list[CrossFieldRule] = []
    for token in split_tag(descriptor.prep):
        compiled = _compile_token(descriptor.identifier, token, strict, _build_prep_token)
        if compiled is not None:
            preprocessors.append(compiled)
    for token in split_tag(descriptor.validate):
        compiled = _compile_token(descriptor.identifier, token, strict, _build_validate_token)
        if isinstance(compiled, CrossFieldRule):
            cross_field_rules.append(compiled)
        elif compiled is not None:
            validators.append(compiled)
    return FieldRule(
        identifier=descriptor.identifier,
        column=descriptor.column or to_snake_case(descriptor.identifier),
        semantic_type=descriptor.semantic_type,
        preprocessors=tuple(preprocessors),
        validators=tuple(validators),
        cross_field_rules=tuple(cross_field_rules),
    )


def _compile_token(
    identifier: str,
    token: TagToken,
    strict: bool,
    builder: Callable[[TagToken], Any],
) -> Any:
    """Compile a token, raising or dropping it on failure.

    Args:
        identifier: Owning field identifier for error context.
        token: Parsed tag token.
        strict: Whether failures are fatal.
        builder: Token compiler raising ValueError on failure.

    Returns:
        Compiled rule, or None when a lenient compile drops the token.

    Raises:
        SiftTagFormatError: In strict mode, when the token is invalid.
    """
    try:
        return builder(token)
    except ValueError as error:
        if strict:
            raise SiftTagFormatError(
                f"Invalid tag token '{token.raw}' on field {identifier}: {error}. "
                "Fix the tag or disable strict tag parsing."
            ) from error
        _LOGGER.warning(
            "tag_token_dropped",
            field=identifier,
            token=token.raw,
            reason=str(error),
        )
        return None


def _build_prep_token(token: TagToken) -> Preprocessor:
    try:
        kind = PrepKind(token.name)
    except ValueError as error:
        raise ValueError(f"unknown prep tag '{token.name}'") from error
    return build_preprocessor(kind, token.argument)


def _build_validate_token(token: TagToken) -> Validator | CrossFieldRule:
    if token.name in _CROSS_FIELD_NAMES:
        return build_cross_field_rule(CrossFieldKind(token.name), token.argument)
    try:
        kind = ValidatorKind(token.name)
    except ValueError as error:
        raise ValueError(f"unknown validate tag '{token.name}'") from error
    return build_validator(kind, token.argument)


def _resolve_cross_field_targets(field_rules: list[FieldRule]) -> list[FieldRule]:
    positions = {field_rule.identifier: index for index, field_rule in enumerate(field_rules)}
    resolved: list[FieldRule] = []
    for field_rule in field_rules:
        if not field_rule.cross_field_rules:
            resolved.append(field_rule)
            continue
        bound_rules = tuple(
            rule.resolved(positions.get(rule.target_field)) for rule in field_rule.cross_field_rules
        )
        resolved.append(replace(field_rule, cross_field_rules=bound_rules))
    return resolved


_CROSS_FIELD_NAMES = frozenset(kind.value for kind in CrossFieldKind)
