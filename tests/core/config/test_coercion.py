import math

import numpy as np
import pytest

from typedconf.core.config.coercion import FieldKind, decode, encode, kind_for_type, kind_of
from typedconf.core.config.errors import ParseError, TypeMismatchError
from tests.fixtures.config_types import Color, Permission


def test_kind_for_type_maps_supported_annotations():
    assert kind_for_type(str) is FieldKind.STRING
    assert kind_for_type(int) is FieldKind.INT32
    assert kind_for_type(float) is FieldKind.FLOAT64
    assert kind_for_type(np.float32) is FieldKind.FLOAT32
    assert kind_for_type(bool) is FieldKind.BOOL
    assert kind_for_type(Color) is FieldKind.ENUM
    assert kind_for_type(list) is None
    assert kind_for_type(np.float64) is None


def test_kind_of_distinguishes_exact_kinds():
    assert kind_of(True) == "bool"
    assert kind_of(7) == "int32"
    assert kind_of(2**40) == "int64"
    assert kind_of(1.5) == "float64"
    assert kind_of(np.float32(1.5)) == "float32"
    assert kind_of("x") == "string"
    assert kind_of(Color.RED) == "enum<Color>"
    assert kind_of(None) == "null"
    assert kind_of([1]) == "list"


def test_decode_int32():
    assert decode(FieldKind.INT32, " -12 ") == -12
    assert decode(FieldKind.INT32, "2147483647") == 2**31 - 1
    assert decode(FieldKind.INT32, "+5") == 5


@pytest.mark.parametrize(
    "raw", ["abc", "1.5", "", "2147483648", "-2147483649", "1_000", "\u0661\u0662", "+ 5"]
)
def test_decode_int32_rejects_invalid_text(raw):
    with pytest.raises(ParseError) as exc_info:
        decode(FieldKind.INT32, raw, key="count")
    assert exc_info.value.key == "count"
    assert exc_info.value.raw_value == raw
    assert exc_info.value.expected_kind is FieldKind.INT32


def test_coerce_bool_forms():
    assert decode(FieldKind.BOOL, "TRUE") is True
    assert decode(FieldKind.BOOL, " yes ") is True
    assert decode(FieldKind.BOOL, "0") is False
    assert decode(FieldKind.BOOL, "off") is False
    assert encode(FieldKind.BOOL, True) == "True"
    with pytest.raises(ParseError):
        decode(FieldKind.BOOL, "maybe")


@pytest.mark.parametrize("value", [0.1, -2.5e-300, 1e308, 3.0, 123456.789])
def test_float64_round_trip(value):
    assert decode(FieldKind.FLOAT64, encode(FieldKind.FLOAT64, value)) == value


def test_float32_round_trip_keeps_type():
    value = np.float32(0.1)
    raw = encode(FieldKind.FLOAT32, value)
    assert raw == "0.1"
    decoded = decode(FieldKind.FLOAT32, raw)
    assert type(decoded) is np.float32
    assert decoded == value


def test_float32_rejects_overflow_but_accepts_infinity():
    with pytest.raises(ParseError):
        decode(FieldKind.FLOAT32, "1e40")
    assert math.isinf(decode(FieldKind.FLOAT32, "inf"))


def test_enum_by_name():
    assert encode(FieldKind.ENUM, Color.BLUE) == "BLUE"
    assert decode(FieldKind.ENUM, "BLUE", enum_type=Color) is Color.BLUE
    assert decode(FieldKind.ENUM, "blue", enum_type=Color) is Color.BLUE
    with pytest.raises(ParseError):
        decode(FieldKind.ENUM, "PURPLE", key="color", enum_type=Color)


def test_flag_combination_round_trip():
    combined = Permission.READ | Permission.WRITE
    raw = encode(FieldKind.ENUM, combined, enum_type=Permission)
    assert decode(FieldKind.ENUM, raw, enum_type=Permission) == combined


def test_string_is_identity_and_none_is_empty():
    assert encode(FieldKind.STRING, "a b") == "a b"
    assert encode(FieldKind.STRING, None) == ""
    assert decode(FieldKind.STRING, "  padded ") == "  padded "


def test_encode_rejects_other_kinds():
    with pytest.raises(TypeMismatchError):
        encode(FieldKind.INT32, True, key="count")
    with pytest.raises(TypeMismatchError):
        encode(FieldKind.FLOAT64, 1, key="scale")
    with pytest.raises(TypeMismatchError):
        encode(FieldKind.ENUM, "RED", key="color", enum_type=Color)
    with pytest.raises(TypeMismatchError):
        encode(FieldKind.INT32, None, key="count")
