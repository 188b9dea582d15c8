"""Typed configuration persistence: schemas, coercion, section store and registries."""

from .coercion import FieldKind, decode, encode, kind_of
from .errors import (
    ConfigError,
    InvalidKeyError,
    KeyNotFoundError,
    ParseError,
    RegistryStateError,
    SchemaMismatchError,
    StoreIOError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from .exit_hook import ExitHook, config_session, get_exit_hook
from .notify import ChangeNotifier, SupportsChangeNotification
from .persistence import CONFIG_SCHEMA_VERSION, SectionHandle, SectionStore
from .reflection import FieldMetadata, Schema, get_field, schema_of, set_field, snapshot
from .registry import ConfigRegistry, RegistryState, registry_for, reset_registries_for_tests

__all__ = [
    "CONFIG_SCHEMA_VERSION",
    "ChangeNotifier",
    "ConfigError",
    "ConfigRegistry",
    "ExitHook",
    "FieldKind",
    "FieldMetadata",
    "InvalidKeyError",
    "KeyNotFoundError",
    "ParseError",
    "RegistryState",
    "RegistryStateError",
    "Schema",
    "SchemaMismatchError",
    "SectionHandle",
    "SectionStore",
    "StoreIOError",
    "SupportsChangeNotification",
    "TypeMismatchError",
    "UnsupportedTypeError",
    "config_session",
    "decode",
    "encode",
    "get_exit_hook",
    "get_field",
    "kind_of",
    "registry_for",
    "reset_registries_for_tests",
    "schema_of",
    "set_field",
    "snapshot",
]
