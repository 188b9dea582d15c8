"""
Configuration registry: one live, persisted instance per configuration type.

A registered type is a plain class (usually a dataclass) whose public fields
are strings, 32-bit ints, floats, bools or enums. The registry keeps a single
instance of it and mirrors its fields into a store section named after the
type.

Two save disciplines are supported:

- Types implementing SupportsChangeNotification (e.g. via ChangeNotifier) are
  written through: each field assignment updates its key in the store before
  the assignment returns.
- Other types are saved on demand. Any access through ``get``/``set`` marks
  the registry dirty, and ``save()``, the end of a ``config_session()`` or
  normal interpreter exit writes the whole section.

Example:
    @dataclass
    class AppSettings:
        name: str = ""
        count: int = 0

    settings = registry_for(AppSettings)
    settings.set_property("count", 5)
"""

from __future__ import annotations

import enum
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generic, Iterator, Optional, Type, TypeVar

from rich.console import Console
from rich.table import Table

from typedconf.core.utils.logger import (
    log_configuration_change,
    log_debug,
    log_error,
    log_info,
    log_warning,
)

from .coercion import FieldKind, decode, encode
from .errors import (
    ConfigError,
    InvalidKeyError,
    KeyNotFoundError,
    RegistryStateError,
    SchemaMismatchError,
    TypeMismatchError,
)
from .exit_hook import ExitHook, get_exit_hook
from .notify import SupportsChangeNotification
from .persistence import SectionHandle, SectionStore
from .reflection import FieldMetadata, Schema, check_field_value, schema_of, set_field

T = TypeVar("T")


class RegistryState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class ConfigRegistry(Generic[T]):
    """Owns the live instance of ``config_type`` and keeps its store section in sync."""

    def __init__(
        self,
        config_type: Type[T],
        store: Optional[SectionStore] = None,
        *,
        initialize: bool = True,
        exit_hook: Optional[ExitHook] = None,
    ):
        """
        Args:
            config_type: Type to register; must be constructible without arguments.
            store: Store holding the section (defaults to the project store).
            initialize: Load or create the section right away.
            exit_hook: Hook that saves deferred registries on exit.

        Raises:
            UnsupportedTypeError: a field has an unsupported type. Raised before
                the store is touched.
        """
        self.config_type = config_type
        self.type_name = config_type.__name__
        self.schema: Schema = schema_of(config_type)
        self.store = store if store is not None else SectionStore()
        self._exit_hook = exit_hook if exit_hook is not None else get_exit_hook()
        self._state = RegistryState.UNINITIALIZED
        self._error: Optional[BaseException] = None
        self._handle: Optional[SectionHandle] = None
        self._is_dirty = False
        self._muted = False

        self._config: T = config_type()
        self._auto_save_enabled = isinstance(self._config, SupportsChangeNotification)
        if self._auto_save_enabled:
            self._config.add_change_listener(self._on_field_changed)  # type: ignore[attr-defined]
        else:
            log_warning(
                "config",
                f"<{self.type_name}> doesn't support change notification, "
                f"use ConfigRegistry[{self.type_name}].save() to store configuration changes",
            )
            self._exit_hook.register(self)

        if initialize:
            self.initialize()

    def __repr__(self) -> str:
        return f"ConfigRegistry({self.type_name}, state={self._state.value}, store={self.store!r})"

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def auto_save_enabled(self) -> bool:
        """Whether field changes are written through to the store."""
        return self._auto_save_enabled

    @property
    def is_dirty(self) -> bool:
        """Whether the live instance may hold changes the store doesn't have."""
        return self._is_dirty

    def _ensure_ready(self) -> None:
        if self._state is RegistryState.READY:
            return
        if self._state is RegistryState.FAILED and self._error is not None:
            raise self._error
        raise RegistryStateError(
            f"<{self.type_name}> configuration is {self._state.value}", type_name=self.type_name
        )

    @contextmanager
    def _notifications_muted(self) -> Iterator[None]:
        previous = self._muted
        self._muted = True
        try:
            yield
        finally:
            self._muted = previous

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """
        Load the section into the live instance, or create it from defaults.

        Runs once. A READY registry returns immediately and a FAILED one
        re-raises the error that failed it.

        Raises:
            SchemaMismatchError: stored keys don't match the type's fields.
            ParseError: a stored value can't be decoded.
            StoreIOError: the store can't be read or written.
        """
        if self._state is RegistryState.READY:
            return
        if self._state is not RegistryState.UNINITIALIZED:
            self._ensure_ready()

        self._state = RegistryState.INITIALIZING
        try:
            self._handle = self.store.open_or_create(self.type_name)
            stored = self.store.read(self._handle)

            if not stored:
                log_info(
                    "config",
                    f"Configuration for <{self.type_name}> not found in store, "
                    "new configuration created with default values",
                )
                self._save_all()
            elif len(stored) != len(self.schema):
                raise SchemaMismatchError(self.type_name, len(stored), len(self.schema))
            else:
                self._load(stored)
                log_info("config", f"Configuration for <{self.type_name}> is initialized from the store")
        except Exception as e:
            self._state = RegistryState.FAILED
            self._error = e
            log_error("config", f"Initialization of <{self.type_name}> failed: {e}", str(self.store.path))
            raise

        self._state = RegistryState.READY

    def _load(self, stored: Dict[str, str]) -> None:
        values: Dict[str, Any] = {}
        for key, raw in stored.items():
            field = self.schema.get(key)
            if field is None:
                raise SchemaMismatchError(
                    self.type_name, len(stored), len(self.schema), unknown_key=key
                )
            values[key] = decode(field.kind, raw, key=key, enum_type=field.enum_type)

        with self._notifications_muted():
            for key, value in values.items():
                set_field(self._config, key, value)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def get(self) -> T:
        """The live instance.

        Without change notification, the registry can't tell reads from
        writes, so every access marks it dirty.
        """
        self._ensure_ready()
        if not self._auto_save_enabled:
            self._is_dirty = True
        return self._config

    # Same instance, same dirty marking; kept as a separate name for call sites that write.
    set = get

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _encode_field(self, field: FieldMetadata, value: Any) -> str:
        return encode(field.kind, value, key=field.name, enum_type=field.enum_type)

    def _on_field_changed(self, sender: Any, name: str) -> None:
        if self._state is not RegistryState.READY or self._muted or sender is not self._config:
            return
        field = self.schema.get(name)
        if field is None:
            return
        value = getattr(self._config, name)
        if value is None and field.kind is FieldKind.STRING:
            with self._notifications_muted():
                setattr(self._config, name, "")
            value = ""
        self.store.write_one(self._handle, name, self._encode_field(field, value))
        log_info("config", f"Property <{name}> is saved")

    def set_property(self, key: str, value: Any) -> None:
        """
        Assign one field and write it to the store immediately.

        Works the same for both save disciplines. ``None`` is accepted for
        string fields and stored as an empty string. On failure the live
        instance keeps its previous value.

        Raises:
            InvalidKeyError: ``key`` is empty or None.
            KeyNotFoundError: ``key`` isn't a field of the type.
            TypeMismatchError: ``value`` isn't exactly of the field's kind.
            StoreIOError: the store couldn't be written.
        """
        self._ensure_ready()
        if not key:
            raise InvalidKeyError(
                f"ConfigRegistry[{self.type_name}].set_property() no valid key provided",
                type_name=self.type_name,
            )
        field = self.schema.get(key)
        if field is None:
            raise KeyNotFoundError(self.type_name, key)
        if value is None and field.kind is FieldKind.STRING:
            value = ""
        check_field_value(field, value)
        raw = self._encode_field(field, value)

        old_value = getattr(self._config, key)
        with self._notifications_muted():
            set_field(self._config, key, value)
        try:
            self.store.write_one(self._handle, key, raw)
        except ConfigError:
            with self._notifications_muted():
                setattr(self._config, key, old_value)
            raise
        log_configuration_change(f"{self.type_name}.{key}", old_value, value)

    def _save_all(self) -> None:
        values: Dict[str, str] = {}
        blanked = []
        for field in self.schema:
            value = getattr(self._config, field.name)
            if value is None and field.kind is FieldKind.STRING:
                blanked.append(field.name)
                value = ""
            values[field.name] = self._encode_field(field, value)

        self.store.write_all(self._handle, values)

        with self._notifications_muted():
            for name in blanked:
                setattr(self._config, name, "")
        self._is_dirty = False
        log_info("config", f"Configuration for <{self.type_name}> is saved")

    def _swap_instance(self, config: T) -> None:
        if self._auto_save_enabled:
            self._config.remove_change_listener(self._on_field_changed)  # type: ignore[attr-defined]
            config.add_change_listener(self._on_field_changed)  # type: ignore[attr-defined]
        self._config = config

    def save(self, config: Optional[T] = None) -> T:
        """
        Write every field of the live instance to the store.

        Args:
            config: Replaces the live instance before saving when given.

        Returns:
            The live instance.

        Raises:
            TypeMismatchError: ``config`` isn't exactly of the registered type,
                or one of its fields has the wrong kind.
            StoreIOError: the store couldn't be written. A replaced instance
                is put back.
        """
        self._ensure_ready()
        previous = self._config
        if config is not None:
            if type(config) is not self.config_type:
                raise TypeMismatchError(self.type_name, self.type_name, type(config).__name__)
            self._swap_instance(config)
        try:
            self._save_all()
        except Exception:
            if config is not None:
                self._swap_instance(previous)
            raise
        return self._config

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def print(self, console: Optional[Console] = None) -> None:
        """Print the current field values and registry state."""
        self._ensure_ready()
        console = console if console is not None else Console()
        console.print(
            f'<{self.type_name} AutoSaveEnabled="{self._auto_save_enabled}" '
            f'IsDirty="{self._is_dirty}">',
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        table = Table(show_header=True)
        table.add_column("Key", style="bold cyan")
        table.add_column("Value")
        table.add_column("Kind", style="dim")
        for field in self.schema:
            value = getattr(self._config, field.name)
            if isinstance(value, enum.Enum):
                value = value.name
            table.add_row(field.name, str(value), field.kind_name)
        console.print(table)
        log_debug("config", f"Configuration for <{self.type_name}> printed")


# Process-wide registry map, keyed by type identity
_registries: Dict[type, ConfigRegistry[Any]] = {}


def registry_for(config_type: Type[T], store: Optional[SectionStore] = None) -> ConfigRegistry[T]:
    """
    Return the process-wide registry of ``config_type``, creating it on first use.

    Initialization errors are raised by the call that creates the registry.
    The failed registry stays in place, so every later operation on it
    re-raises the same error.
    """
    registry = _registries.get(config_type)
    if registry is None:
        registry = ConfigRegistry(config_type, store, initialize=False)
        _registries[config_type] = registry
        registry.initialize()
    elif store is not None and Path(store.path) != Path(registry.store.path):
        log_warning(
            "config",
            f"<{registry.type_name}> is already bound to {registry.store.path}, ignoring {store.path}",
        )
    return registry


def reset_registries_for_tests() -> None:
    """Forget every registry and detach them from the exit hook."""
    hook = get_exit_hook()
    for registry in list(_registries.values()):
        hook.unregister(registry)
    _registries.clear()
