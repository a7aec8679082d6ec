import pytest

from cstfmt.conf.settings import FormatSettings
from cstfmt.directives import select_conversion
from cstfmt.exception import TypeMismatchError, UnsupportedFloatWidthError
from cstfmt.scanner import DirectiveKind
from cstfmt.types import (
    BOOL,
    CHAR,
    FLOAT16,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    CopyPolicy,
    FloatType,
    StrType,
    cstr_type,
)

settings = FormatSettings()
fixed_digits_settings = FormatSettings(FLOAT_ROUND_TRIP=False)


@pytest.mark.parametrize('arg_type, max_length', [
    (INT8, 4),
    (UINT8, 3),
    (INT16, 6),
    (UINT16, 5),
    (INT32, 11),
    (UINT32, 10),
    (INT64, 20),
    (UINT64, 20),
    (BOOL, 1),
])
def test_decimal_max_length(arg_type, max_length):
    assert select_conversion(DirectiveKind.DECIMAL, arg_type, settings).max_length == max_length


@pytest.mark.parametrize('arg_type, max_length', [
    (INT8, 4),
    (UINT8, 4),
    (INT16, 6),
    (INT32, 10),
    (UINT32, 10),
    (INT64, 18),
    (UINT64, 18),
    (BOOL, 3),
])
def test_hex_max_length(arg_type, max_length):
    assert select_conversion(DirectiveKind.HEX, arg_type, settings).max_length == max_length


@pytest.mark.parametrize('arg_type, round_trip_length, fixed_digits_length', [
    (FLOAT16, 12, 12),
    (FLOAT32, 15, 12),
    (FLOAT64, 24, 13),
])
def test_float_max_length(arg_type, round_trip_length, fixed_digits_length):
    assert select_conversion(DirectiveKind.FLOAT, arg_type, settings).max_length == round_trip_length
    assert select_conversion(DirectiveKind.FLOAT, arg_type, fixed_digits_settings).max_length == fixed_digits_length


def test_float_max_length_grows_with_significant_digits():
    more_digits = FormatSettings(FLOAT_SIGNIFICANT_DIGITS=17, FLOAT_ROUND_TRIP=False)
    assert select_conversion(DirectiveKind.FLOAT, FLOAT64, more_digits).max_length == 24
    assert select_conversion(DirectiveKind.FLOAT, FLOAT16, more_digits).max_length == 23


def test_string_and_char_max_length():
    assert select_conversion(DirectiveKind.STRING, StrType(0, CopyPolicy.COPY_ALL), settings).max_length == 0
    assert select_conversion(DirectiveKind.STRING, StrType(7, CopyPolicy.COPY_ALL), settings).max_length == 7
    assert select_conversion(DirectiveKind.STRING, cstr_type(32), settings).max_length == 32
    assert select_conversion(DirectiveKind.CHAR, CHAR, settings).max_length == 1


@pytest.mark.parametrize('kind, arg_type', [
    (DirectiveKind.DECIMAL, FLOAT64),
    (DirectiveKind.DECIMAL, CHAR),
    (DirectiveKind.DECIMAL, cstr_type(4)),
    (DirectiveKind.HEX, FLOAT32),
    (DirectiveKind.FLOAT, INT32),
    (DirectiveKind.FLOAT, BOOL),
    (DirectiveKind.STRING, INT32),
    (DirectiveKind.STRING, CHAR),
    (DirectiveKind.CHAR, UINT8),
    (DirectiveKind.CHAR, StrType(1, CopyPolicy.COPY_ALL)),
])
def test_type_mismatch(kind, arg_type):
    with pytest.raises(TypeMismatchError, match=f"'%{kind.value}' expected"):
        select_conversion(kind, arg_type, settings)


def test_unsupported_float_width():
    with pytest.raises(UnsupportedFloatWidthError, match='80 bits'):
        select_conversion(DirectiveKind.FLOAT, FloatType(80), settings)
    # still a type mismatch for callers that only care about that
    with pytest.raises(TypeMismatchError):
        select_conversion(DirectiveKind.FLOAT, FloatType(128), settings)
