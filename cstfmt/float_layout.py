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
Bit layouts of the binary floating point formats that `%f` can render.

A layout knows how to get the raw bit pattern of a value (through `struct`, which also rounds a Python float to the
narrower formats) and how to split that pattern into sign, exponent and fraction fields. Decomposition is exact: a
finite value is always `significand * 2**exponent` with integer significand and exponent.

>>> FLOAT64.decompose(-0.0)
DecomposedFloat(negative=True, float_class=<FloatClass.ZERO: 'zero'>, significand=0, exponent=0, narrow_gap_below=False)
>>> parts = FLOAT32.decompose(1.5)
>>> parts.significand * 2 ** parts.exponent
1.5
>>> FLOAT16.decompose(2.0 ** -24).float_class
<FloatClass.SUBNORMAL: 'subnormal'>
"""

import struct
from dataclasses import dataclass
from enum import Enum

from cstfmt.exception import UnsupportedFloatWidthError


class FloatClass(Enum):
    ZERO = 'zero'
    SUBNORMAL = 'subnormal'
    NORMAL = 'normal'
    INFINITE = 'infinite'
    NAN = 'nan'


@dataclass(frozen=True)
class DecomposedFloat:
    negative: bool
    float_class: FloatClass
    # a finite value is exactly `significand * 2**exponent`
    significand: int
    exponent: int
    # true when the next representable value below is closer than the next one above, which happens for normal
    # values with an all-zero fraction (except the smallest normal)
    narrow_gap_below: bool


@dataclass(frozen=True)
class FloatLayout:
    bits: int
    exponent_bits: int
    fraction_bits: int
    struct_format: str
    # number of significant decimal digits that always round-trips, like C++'s `max_digits10`
    max_digits10: int
    # number of digits of the largest decimal exponent magnitude, subnormals included
    exponent_digits: int

    @property
    def bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    def round_value(self, value: float) -> float:
        """Round a Python float to the nearest value of this layout."""
        try:
            packed = struct.pack(self.struct_format, value)
        except OverflowError:
            raise ValueError(f'{value!r} is too big for a {self.bits}-bit float')
        result, = struct.unpack(self.struct_format, packed)
        return result

    def to_bits(self, value: float) -> int:
        return int.from_bytes(struct.pack(self.struct_format, value), byteorder='big')

    def from_bits(self, raw: int) -> float:
        result, = struct.unpack(self.struct_format, raw.to_bytes(self.bits // 8, byteorder='big'))
        return result

    def decompose(self, value: float) -> DecomposedFloat:
        raw = self.to_bits(value)
        negative = bool(raw >> (self.bits - 1))
        exponent_mask = (1 << self.exponent_bits) - 1
        biased_exponent = (raw >> self.fraction_bits) & exponent_mask
        fraction = raw & ((1 << self.fraction_bits) - 1)

        if biased_exponent == exponent_mask:
            float_class = FloatClass.NAN if fraction else FloatClass.INFINITE
            return DecomposedFloat(negative, float_class, 0, 0, False)

        if biased_exponent == 0:
            if fraction == 0:
                return DecomposedFloat(negative, FloatClass.ZERO, 0, 0, False)
            # subnormals share the exponent of the smallest normal, without the implicit leading bit
            exponent = 1 - self.bias - self.fraction_bits
            return DecomposedFloat(negative, FloatClass.SUBNORMAL, fraction, exponent, False)

        significand = fraction | (1 << self.fraction_bits)
        exponent = biased_exponent - self.bias - self.fraction_bits
        narrow_gap_below = fraction == 0 and biased_exponent > 1
        return DecomposedFloat(negative, FloatClass.NORMAL, significand, exponent, narrow_gap_below)


FLOAT16 = FloatLayout(bits=16, exponent_bits=5, fraction_bits=10, struct_format='>e', max_digits10=5,
                      exponent_digits=1)
FLOAT32 = FloatLayout(bits=32, exponent_bits=8, fraction_bits=23, struct_format='>f', max_digits10=9,
                      exponent_digits=2)
FLOAT64 = FloatLayout(bits=64, exponent_bits=11, fraction_bits=52, struct_format='>d', max_digits10=17,
                      exponent_digits=3)

_LAYOUTS: dict[int, FloatLayout] = {layout.bits: layout for layout in (FLOAT16, FLOAT32, FLOAT64)}


def get_float_layout(bits: int) -> FloatLayout:
    """Return the layout for a float width, raises UnsupportedFloatWidthError for widths without a known layout."""
    layout = _LAYOUTS.get(bits)
    if layout is None:
        supported = ', '.join(str(b) for b in sorted(_LAYOUTS))
        raise UnsupportedFloatWidthError(f'unsupported float width: {bits} bits (supported: {supported})')
    return layout
