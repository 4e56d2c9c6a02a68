"""YAML schema definition files.

This module loads field descriptors from a YAML file so record schemas can
be declared without writing a dataclass. Parsed files become a tuple of
``FieldSpec`` that the compiler accepts like any other target.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence, cast

from core.errors import SiftDependencyError, SiftSchemaFileError
from core.types import SEMANTIC_TYPE_NAMES, FieldSpec

_ROOT_KEYS = {"version", "fields"}
_FIELD_KEYS = {"field", "type", "column", "prep", "validate"}


def load_schema_file(schema_path: str) -> tuple[FieldSpec, ...]:
    """Load and validate a YAML schema file.

    Args:
        schema_path: Path to a YAML file with ``version`` and ``fields``.

    Returns:
        Field descriptors in file order.

    Raises:
        SiftDependencyError: If PyYAML is unavailable.
        SiftSchemaFileError: If the file is unreadable or invalid.
    """
    payload = _load_yaml_payload(schema_path)
    root_mapping = _expect_mapping(payload, "schema root")
    _validate_keys(root_mapping, _ROOT_KEYS, "schema root")
    _parse_version(root_mapping)
    field_rows = _expect_sequence(root_mapping.get("fields"), "schema fields")
    if len(field_rows) == 0:
        raise SiftSchemaFileError("Schema field 'fields' must include at least one field.")
    specs = tuple(_parse_field(row, index) for index, row in enumerate(field_rows))
    _validate_unique_identifiers(specs)
    return specs


def _load_yaml_payload(schema_path: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise SiftDependencyError(
            "YAML schema support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    schema_file = Path(schema_path).expanduser().resolve()
    if not schema_file.exists():
        raise SiftSchemaFileError(
            f"Schema file does not exist at {schema_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(schema_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise SiftSchemaFileError(
            f"Failed to read schema file at {schema_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise SiftSchemaFileError(
            f"Failed to parse YAML schema at {schema_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise SiftSchemaFileError(f"Schema file at {schema_file} is empty. Define 'version' and 'fields'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise SiftSchemaFileError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise SiftSchemaFileError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise SiftSchemaFileError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> None:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise SiftSchemaFileError("Schema field 'version' must be an integer. Set version: 1.")
    if raw_version != 1:
        raise SiftSchemaFileError(f"Unsupported schema version {raw_version}. Use version: 1.")


def _parse_field(field_value: object, field_index: int) -> FieldSpec:
    context = f"schema field #{field_index + 1}"
    field_mapping = _expect_mapping(field_value, context)
    _validate_keys(field_mapping, _FIELD_KEYS, context)
    identifier = _optional_string(field_mapping, "field", context)
    if identifier is None:
        raise SiftSchemaFileError(f"Invalid {context}: field 'field' must be a non-empty string.")
    semantic_type = _optional_string(field_mapping, "type", context) or "string"
    if semantic_type.lower() not in SEMANTIC_TYPE_NAMES:
        supported_rows = ", ".join(sorted(SEMANTIC_TYPE_NAMES))
        raise SiftSchemaFileError(
            f"Unsupported type '{semantic_type}' in {context}. Use one of: {supported_rows}."
        )
    return FieldSpec(
        identifier=identifier,
        semantic_type=semantic_type.lower(),
        column=_optional_string(field_mapping, "column", context),
        prep=_optional_string(field_mapping, "prep", context) or "",
        validate=_optional_string(field_mapping, "validate", context) or "",
    )


def _optional_string(mapping: Mapping[str, object], field_name: str, context: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        normalized_value = raw_value.strip()
        return normalized_value if normalized_value else None
    raise SiftSchemaFileError(f"Invalid {context}: field '{field_name}' must be a string when provided.")


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise SiftSchemaFileError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")


def _validate_unique_identifiers(specs: tuple[FieldSpec, ...]) -> None:
    seen: set[str] = set()
    for spec in specs:
        if spec.identifier in seen:
            raise SiftSchemaFileError(
                f"Schema declares field '{spec.identifier}' more than once. Rename or remove the duplicate."
            )
        seen.add(spec.identifier)
