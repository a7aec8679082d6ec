# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Mapping of (directive, argument kind) pairs to their estimator and encoder.

This is where a template is checked against argument types: `select_conversion` either returns a conversion with its
maximum length already computed, or raises TypeMismatchError (UnsupportedFloatWidthError for floats without a known
layout). Nothing here ever looks at an argument value.
"""

from dataclasses import dataclass
from typing import Any, Callable, NamedTuple

from cstfmt.conf.settings import FormatSettings
from cstfmt.encoding.char import MAX_LENGTH as CHAR_MAX_LENGTH, encode_char
from cstfmt.encoding.decimal import (
    BOOL_MAX_LENGTH as DECIMAL_BOOL_MAX_LENGTH,
    encode_bool_decimal,
    encode_decimal,
    max_length_decimal,
)
from cstfmt.encoding.float import encode_float, max_length_float
from cstfmt.encoding.hex import BOOL_MAX_LENGTH as HEX_BOOL_MAX_LENGTH, encode_bool_hex, encode_hex, max_length_hex
from cstfmt.encoding.string import encode_string
from cstfmt.exception import TypeMismatchError
from cstfmt.float_layout import FloatLayout, get_float_layout
from cstfmt.scanner import DirectiveKind
from cstfmt.serialization import Serializer
from cstfmt.types import ArgKind, ArgType, CopyPolicy

Estimator = Callable[[Any, FormatSettings], int]
Encoder = Callable[[Serializer, Any, Any, FormatSettings], None]


class _Rule(NamedTuple):
    estimator: Estimator
    encoder: Encoder


def _float_digits(layout: FloatLayout, settings: FormatSettings) -> tuple[int, int]:
    """The (min, max) number of significant digits a `%f` conversion may use."""
    min_digits = settings.FLOAT_SIGNIFICANT_DIGITS
    if not settings.FLOAT_ROUND_TRIP:
        return min_digits, min_digits
    return min_digits, max(min_digits, layout.max_digits10)


def _estimate_float(type_: Any, settings: FormatSettings) -> int:
    layout = get_float_layout(type_.bits)
    _, max_digits = _float_digits(layout, settings)
    return max_length_float(layout, max_digits=max_digits)


def _encode_float(serializer: Serializer, value: float, type_: Any, settings: FormatSettings) -> None:
    layout = get_float_layout(type_.bits)
    min_digits, max_digits = _float_digits(layout, settings)
    encode_float(serializer, value, layout, min_digits=min_digits, max_digits=max_digits)


def _encode_string(serializer: Serializer, value: Any, type_: Any, settings: FormatSettings) -> None:
    encode_string(serializer, value, max_length=type_.max_length,
                  stop_at_zero=type_.policy is CopyPolicy.STOP_AT_ZERO)


_integer_decimal = _Rule(
    lambda type_, settings: max_length_decimal(bits=type_.bits, signed=type_.signed),
    lambda se, value, type_, settings: encode_decimal(se, value, bits=type_.bits, signed=type_.signed),
)
_integer_hex = _Rule(
    lambda type_, settings: max_length_hex(bits=type_.bits),
    lambda se, value, type_, settings: encode_hex(se, value, bits=type_.bits),
)

_RULES: dict[DirectiveKind, dict[ArgKind, _Rule]] = {
    DirectiveKind.DECIMAL: {
        ArgKind.SIGNED_INT: _integer_decimal,
        ArgKind.UNSIGNED_INT: _integer_decimal,
        ArgKind.BOOL: _Rule(
            lambda type_, settings: DECIMAL_BOOL_MAX_LENGTH,
            lambda se, value, type_, settings: encode_bool_decimal(se, value),
        ),
    },
    DirectiveKind.HEX: {
        ArgKind.SIGNED_INT: _integer_hex,
        ArgKind.UNSIGNED_INT: _integer_hex,
        ArgKind.BOOL: _Rule(
            lambda type_, settings: HEX_BOOL_MAX_LENGTH,
            lambda se, value, type_, settings: encode_bool_hex(se, value),
        ),
    },
    DirectiveKind.FLOAT: {
        ArgKind.FLOAT: _Rule(_estimate_float, _encode_float),
    },
    DirectiveKind.STRING: {
        ArgKind.STRING: _Rule(lambda type_, settings: type_.max_length, _encode_string),
    },
    DirectiveKind.CHAR: {
        ArgKind.CHAR: _Rule(
            lambda type_, settings: CHAR_MAX_LENGTH,
            lambda se, value, type_, settings: encode_char(se, value),
        ),
    },
}

_EXPECTED: dict[DirectiveKind, str] = {
    DirectiveKind.DECIMAL: 'an integral type',
    DirectiveKind.HEX: 'an integral type',
    DirectiveKind.FLOAT: 'a floating point type',
    DirectiveKind.STRING: 'a string view, char array or bounded buffer',
    DirectiveKind.CHAR: 'a char type',
}


@dataclass(frozen=True)
class Conversion:
    """A directive bound to the type of its argument."""
    kind: DirectiveKind
    arg_type: ArgType
    max_length: int
    encoder: Encoder

    def encode(self, serializer: Serializer, value: Any, settings: FormatSettings) -> None:
        self.encoder(serializer, value, self.arg_type, settings)


def select_conversion(kind: DirectiveKind, arg_type: ArgType, settings: FormatSettings) -> Conversion:
    """Match an argument type with a directive and compute the maximum length of the conversion."""
    rule = _RULES[kind].get(arg_type.kind)
    if rule is None:
        raise TypeMismatchError(f"'%{kind.value}' expected {_EXPECTED[kind]}, got {arg_type}")
    return Conversion(kind, arg_type, rule.estimator(arg_type, settings), rule.encoder)
