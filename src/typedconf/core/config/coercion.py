"""Value coercion between field values and their stored string form."""

from __future__ import annotations

import enum
import math
import re
import warnings
from typing import Any, Optional

import numpy as np

from .errors import ParseError, TypeMismatchError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
FLOAT32_MAX = float(np.finfo(np.float32).max)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class FieldKind(str, enum.Enum):
    """Kinds of values a section can hold."""

    STRING = "string"
    INT32 = "int32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    ENUM = "enum"


def kind_for_type(annotation: Any) -> Optional[FieldKind]:
    """Map a field annotation to its kind, or None when it isn't supported."""
    if annotation is bool:
        return FieldKind.BOOL
    if annotation is int:
        return FieldKind.INT32
    if annotation is float:
        return FieldKind.FLOAT64
    if annotation is np.float32:
        return FieldKind.FLOAT32
    if annotation is str:
        return FieldKind.STRING
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return FieldKind.ENUM
    return None


def kind_of(value: Any) -> str:
    """Describe the runtime kind of a value, using the FieldKind names where possible."""
    if value is None:
        return "null"
    value_type = type(value)
    if value_type is bool:
        return FieldKind.BOOL.value
    if value_type is int:
        return FieldKind.INT32.value if INT32_MIN <= value <= INT32_MAX else "int64"
    if value_type is float:
        return FieldKind.FLOAT64.value
    if value_type is np.float32:
        return FieldKind.FLOAT32.value
    if value_type is str:
        return FieldKind.STRING.value
    if isinstance(value, enum.Enum):
        return f"enum<{value_type.__name__}>"
    return value_type.__name__


def expected_kind_name(kind: FieldKind, enum_type: Optional[type] = None) -> str:
    if kind is FieldKind.ENUM and enum_type is not None:
        return f"enum<{enum_type.__name__}>"
    return kind.value


def matches_kind(kind: FieldKind, value: Any, enum_type: Optional[type] = None) -> bool:
    """Exact kind check: no subclass or numeric widening is accepted."""
    if kind is FieldKind.ENUM:
        return enum_type is not None and type(value) is enum_type
    return kind_of(value) == kind.value


def _enum_name(value: enum.Enum) -> str:
    if value.name is not None:
        return value.name
    # Combined flags without a member name on older interpreters
    return str(value.value)


def encode(kind: FieldKind, value: Any, *, key: str = "", enum_type: Optional[type] = None) -> str:
    """Encode a field value into its stored string form."""
    if kind is FieldKind.STRING and value is None:
        return ""
    if kind is FieldKind.ENUM and enum_type is None and isinstance(value, enum.Enum):
        enum_type = type(value)
    if not matches_kind(kind, value, enum_type):
        raise TypeMismatchError(key, expected_kind_name(kind, enum_type), kind_of(value))
    if kind is FieldKind.STRING:
        return value
    if kind is FieldKind.ENUM:
        return _enum_name(value)
    if kind is FieldKind.FLOAT64:
        return repr(value)
    # int32, float32 and bool use their shortest round-trip text
    return str(value)


def _decode_bool(raw: str) -> Optional[bool]:
    lowered = raw.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    return None


def _decode_int32(raw: str) -> Optional[int]:
    text = raw.strip()
    # Optional sign and ASCII digits only
    if not _INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


def _decode_float64(raw: str) -> Optional[float]:
    try:
        return float(raw.strip())
    except ValueError:
        return None


def _decode_float32(raw: str) -> Optional[np.float32]:
    text = raw.strip()
    try:
        as_double = float(text)
    except ValueError:
        return None
    if math.isfinite(as_double) and abs(as_double) > FLOAT32_MAX:
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        return np.float32(text)


def _decode_enum(raw: str, enum_type: type) -> Optional[enum.Enum]:
    text = raw.strip()
    members = enum_type.__members__
    if text in members:
        return members[text]
    if issubclass(enum_type, enum.Flag) and "|" in text:
        parts = [part.strip() for part in text.split("|")]
        if all(part in members for part in parts):
            combined = members[parts[0]]
            for part in parts[1:]:
                combined |= members[part]
            return combined
    lowered = text.lower()
    candidates = {member for name, member in members.items() if name.lower() == lowered}
    if len(candidates) == 1:
        return candidates.pop()
    if issubclass(enum_type, enum.Flag) and _INT_PATTERN.fullmatch(text):
        try:
            return enum_type(int(text))
        except ValueError:
            return None
    return None


def decode(
    kind: FieldKind, raw: str, *, key: str = "", enum_type: Optional[type] = None
) -> Any:
    """Decode a stored string into a value of the given kind.

    Raises ParseError when the text isn't a valid value of that kind; a
    default is never substituted.
    """
    if kind is FieldKind.STRING:
        return raw
    if kind is FieldKind.BOOL:
        value = _decode_bool(raw)
    elif kind is FieldKind.INT32:
        value = _decode_int32(raw)
    elif kind is FieldKind.FLOAT64:
        value = _decode_float64(raw)
    elif kind is FieldKind.FLOAT32:
        value = _decode_float32(raw)
    elif kind is FieldKind.ENUM:
        if enum_type is None:
            raise ValueError(f"Enum type required to decode '{key}'")
        value = _decode_enum(raw, enum_type)
    else:
        value = None
    if value is None:
        raise ParseError(key, raw, kind)
    return value
