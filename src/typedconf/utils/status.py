"""Status flags with change notification."""

from __future__ import annotations

import enum
from typing import Callable, Generic, List, Optional, Type, TypeVar, Union

F = TypeVar("F", bound=enum.Flag)


class StatusError(Exception):
    """Raised when a Status is built over something that isn't an enum.Flag."""


class Status(Generic[F]):
    """
    Mutable set of flags from an ``enum.Flag`` type.

    ``status += flag`` sets bits and ``status -= flag`` clears them. Comparing
    with a flag tests bits: ``status == Flag.A`` is true when A is set, and
    comparing with the zero flag is true only when nothing is set. Listeners
    registered with ``on_changed`` are called after every actual change.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, flag_type: Type[F], flags: Optional[F] = None):
        if not (isinstance(flag_type, type) and issubclass(flag_type, enum.Flag)):
            name = getattr(flag_type, "__name__", repr(flag_type))
            raise StatusError(f"{name} has to be an enum.Flag to be used as status")
        self.flag_type = flag_type
        self._flags: F = flag_type(0) if flags is None else self._coerce(flags)
        self._listeners: List[Callable[["Status[F]", F], None]] = []

    def __repr__(self) -> str:
        return f"Status({self.flag_type.__name__}, {self._flags!r})"

    def _coerce(self, flags: Union[F, "Status[F]"]) -> F:
        if isinstance(flags, Status):
            flags = flags.flags
        if not isinstance(flags, self.flag_type):
            raise StatusError(
                f"{flags!r} is not a {self.flag_type.__name__} flag"
            )
        return flags

    @property
    def flags(self) -> F:
        return self._flags

    def _update(self, flags: F) -> None:
        if flags.value == self._flags.value:
            return
        self._flags = flags
        for listener in list(self._listeners):
            listener(self, flags)

    def on_changed(self, listener: Callable[["Status[F]", F], None]) -> None:
        """Call ``listener(status, new_flags)`` whenever the flags change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[["Status[F]", F], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set(self, flags: F) -> "Status[F]":
        self._update(self._flags | self._coerce(flags))
        return self

    def clear(self, flags: F) -> "Status[F]":
        self._update(self._flags & ~self._coerce(flags))
        return self

    def assign(self, flags: F) -> "Status[F]":
        """Replace all flags at once."""
        self._update(self._coerce(flags))
        return self

    def test(self, flags: F) -> bool:
        flags = self._coerce(flags)
        if flags.value == 0:
            return self._flags.value == 0
        return (self._flags & flags) == flags

    def __iadd__(self, flags: F) -> "Status[F]":
        return self.set(flags)

    def __isub__(self, flags: F) -> "Status[F]":
        return self.clear(flags)

    def __contains__(self, flags: F) -> bool:
        return self.test(flags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Status):
            return self._flags.value == other.flags.value
        if isinstance(other, self.flag_type):
            return self.test(other)
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result
