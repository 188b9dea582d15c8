"""
Exceptions raised by the configuration core.

Every error derives from ConfigError and keeps the values that describe the
failure as attributes, so callers can react without parsing messages.
"""

from __future__ import annotations

from typing import Any, Optional


class ConfigError(Exception):
    """Base class for configuration persistence errors."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.type_name = type_name


class UnsupportedTypeError(ConfigError):
    """A field is annotated with a type the store cannot represent."""

    def __init__(self, type_name: str, field_name: str, annotation: Any):
        annotation_name = getattr(annotation, "__name__", repr(annotation))
        super().__init__(
            f"<{type_name}> field '{field_name}' has unsupported type {annotation_name}",
            type_name=type_name,
        )
        self.field_name = field_name
        self.annotation = annotation


class SchemaMismatchError(ConfigError):
    """The stored section does not match the current shape of the type."""

    def __init__(
        self,
        type_name: str,
        stored_count: int,
        expected_count: int,
        unknown_key: Optional[str] = None,
    ):
        if unknown_key is not None:
            message = (
                f"Invalid <{type_name}> section in store, key '{unknown_key}' "
                f"doesn't match any <{type_name}> field"
            )
        else:
            message = (
                f"Invalid <{type_name}> section in store, {stored_count} stored keys "
                f"but <{type_name}> has {expected_count} fields"
            )
        super().__init__(message, type_name=type_name)
        self.stored_count = stored_count
        self.expected_count = expected_count
        self.unknown_key = unknown_key


class ParseError(ConfigError):
    """A stored string can't be decoded into the field's kind."""

    def __init__(self, key: str, raw_value: str, expected_kind: Any):
        kind_name = getattr(expected_kind, "value", expected_kind)
        super().__init__(f"Unable to parse {raw_value!r} for '{key}' as {kind_name}")
        self.key = key
        self.raw_value = raw_value
        self.expected_kind = expected_kind


class InvalidKeyError(ConfigError):
    """An empty or missing key was passed to set_property."""


class KeyNotFoundError(ConfigError, KeyError):
    """The key doesn't name a field of the registered type."""

    def __init__(self, type_name: str, key: str):
        ConfigError.__init__(self, f"<{type_name}> has no field '{key}'", type_name=type_name)
        self.key = key

    def __str__(self) -> str:
        return self.message


class TypeMismatchError(ConfigError, TypeError):
    """A value's kind differs from the field's declared kind."""

    def __init__(self, field_name: str, expected_kind: Any, actual_kind: str):
        expected_name = getattr(expected_kind, "value", expected_kind)
        super().__init__(
            f"Type mismatch, value for '{field_name}' has to be {expected_name}, got {actual_kind}"
        )
        self.field_name = field_name
        self.expected_kind = expected_kind
        self.actual_kind = actual_kind


class StoreIOError(ConfigError):
    """The section store couldn't be read or written."""

    def __init__(self, message: str, path: Any = None):
        super().__init__(message)
        self.path = path


class RegistryStateError(ConfigError):
    """An operation was attempted on a registry that isn't initialized."""
