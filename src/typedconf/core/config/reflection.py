"""Field schemas for registered configuration types."""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterator, Optional, Tuple

from .coercion import FieldKind, encode, expected_kind_name, kind_for_type, kind_of, matches_kind
from .errors import KeyNotFoundError, TypeMismatchError, UnsupportedTypeError


@dataclass(frozen=True)
class FieldMetadata:
    """Metadata describing a persisted field."""

    name: str
    kind: FieldKind
    type: type
    default: Any = None

    @property
    def enum_type(self) -> Optional[type]:
        return self.type if self.kind is FieldKind.ENUM else None

    @property
    def kind_name(self) -> str:
        return expected_kind_name(self.kind, self.enum_type)


@dataclass(frozen=True)
class Schema:
    """Ordered fields of a registered type."""

    type_name: str
    fields: Tuple[FieldMetadata, ...]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def get(self, name: str) -> Optional[FieldMetadata]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[FieldMetadata]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


def _public_annotations(cls: type) -> Dict[str, Any]:
    hints = typing.get_type_hints(cls)
    if dataclasses.is_dataclass(cls):
        return {
            field.name: hints[field.name]
            for field in dataclasses.fields(cls)
            if not field.name.startswith("_")
        }
    return {
        name: hint
        for name, hint in hints.items()
        if not name.startswith("_") and typing.get_origin(hint) is not typing.ClassVar
        and hint is not typing.ClassVar
    }


def _field_default(cls: type, name: str) -> Any:
    if dataclasses.is_dataclass(cls):
        for field in dataclasses.fields(cls):
            if field.name != name:
                continue
            if field.default is not dataclasses.MISSING:
                return field.default
            if field.default_factory is not dataclasses.MISSING:
                return field.default_factory()
            return None
    return getattr(cls, name, None)


@lru_cache(maxsize=None)
def schema_of(cls: type) -> Schema:
    """Build the schema of ``cls`` once and cache it for the process lifetime.

    Raises:
        UnsupportedTypeError: a public field has a type outside the supported kinds.
    """
    fields = []
    for name, annotation in _public_annotations(cls).items():
        kind = kind_for_type(annotation)
        if kind is None:
            raise UnsupportedTypeError(cls.__name__, name, annotation)
        fields.append(
            FieldMetadata(name=name, kind=kind, type=annotation, default=_field_default(cls, name))
        )
    return Schema(type_name=cls.__name__, fields=tuple(fields))


def _require_field(instance: Any, name: str) -> FieldMetadata:
    schema = schema_of(type(instance))
    field = schema.get(name)
    if field is None:
        raise KeyNotFoundError(schema.type_name, name)
    return field


def get_field(instance: Any, name: str) -> Any:
    """Read a schema field from a live instance."""
    _require_field(instance, name)
    return getattr(instance, name)


def check_field_value(field: FieldMetadata, value: Any) -> None:
    """Raise TypeMismatchError unless ``value`` is exactly of the field's kind."""
    if not matches_kind(field.kind, value, field.enum_type):
        raise TypeMismatchError(field.name, field.kind_name, kind_of(value))


def set_field(instance: Any, name: str, value: Any) -> None:
    """Assign a schema field on a live instance after an exact kind check."""
    field = _require_field(instance, name)
    check_field_value(field, value)
    setattr(instance, name, value)


def snapshot(instance: Any) -> Dict[str, str]:
    """Encode every schema field of ``instance`` in schema order."""
    schema = schema_of(type(instance))
    return {
        field.name: encode(field.kind, getattr(instance, field.name), key=field.name, enum_type=field.enum_type)
        for field in schema
    }
