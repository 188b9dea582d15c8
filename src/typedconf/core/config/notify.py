"""Field change notification for auto-saving configuration types."""

from __future__ import annotations

from typing import Any, Callable, List, Protocol, runtime_checkable

ChangeListener = Callable[[Any, str], None]


@runtime_checkable
class SupportsChangeNotification(Protocol):
    """Capability contract for types whose field changes can be observed.

    A registered type that implements this protocol is saved field by field
    as it changes; any other type is saved on demand.
    """

    def add_change_listener(self, listener: ChangeListener) -> None: ...

    def remove_change_listener(self, listener: ChangeListener) -> None: ...


class ChangeNotifier:
    """
    Mixin that reports public attribute assignments to its listeners.

    Listeners are called as ``listener(instance, field_name)`` after the new
    value is stored, and only when the value actually changed. Private
    attributes (leading underscore) are never reported. If a listener
    raises, the previous value is restored before the error propagates.

    Works with dataclasses: assignments made by the generated ``__init__``
    happen before anyone can subscribe.
    """

    def add_change_listener(self, listener: ChangeListener) -> None:
        listeners = self.__dict__.get("_change_listeners")
        if listeners is None:
            listeners = []
            object.__setattr__(self, "_change_listeners", listeners)
        if listener not in listeners:
            listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        listeners: List[ChangeListener] = self.__dict__.get("_change_listeners") or []
        if listener in listeners:
            listeners.remove(listener)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        missing = object()
        old_value = self.__dict__.get(name, missing)
        object.__setattr__(self, name, value)
        if old_value is not missing and type(old_value) is type(value) and old_value == value:
            return
        try:
            self.notify_changed(name)
        except Exception:
            # A rejected change leaves the attribute as it was
            if old_value is missing:
                object.__delattr__(self, name)
            else:
                object.__setattr__(self, name, old_value)
            raise

    def notify_changed(self, name: str) -> None:
        """Report a change of ``name`` to every listener."""
        for listener in list(self.__dict__.get("_change_listeners") or []):
            listener(self, name)
