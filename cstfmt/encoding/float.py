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
This module implements the `%f` conversion: decimal text of binary floating point values.

The text is built from the raw bits of the value, no float printing routine is involved:

1. the sign comes from the sign bit, so `-0.0` and negative NaNs keep their `-`;
2. NaN, infinities and zeros are written as `nan`, `inf` and `0`;
3. the value is decomposed into an exact `significand * 2**exponent`;
4. its decimal exponent is estimated with a series logarithm, then fixed with exact integer arithmetic while the
   value is scaled to `n` significant digits (rounded half to even, a carry adds one to the exponent);
5. starting at `min_digits`, `n` is increased until the text reads back as the same value, up to `max_digits`;
6. exponents in [-4, 4] are written in fixed notation, others as `<digit>.<digits>e<sign><exponent>`, trailing
   fractional zeros are never written.

>>> def fmt(value, layout=FLOAT64, min_digits=6, max_digits=17):
...     se = Serializer.build_fixed_buffer_serializer(max_length_float(layout, max_digits=max_digits))
...     encode_float(se, layout.round_value(value), layout, min_digits=min_digits, max_digits=max_digits)
...     return bytes(se.finalize()).rstrip(b'\\x00').decode()
>>> fmt(0.0), fmt(-0.0), fmt(float('-inf')), fmt(float('nan'))
('0', '-0', '-inf', 'nan')
>>> fmt(1234.456789), fmt(0.0001), fmt(12345.0), fmt(123456.0), fmt(-2.5e-300)
('1234.456789', '0.0001', '12345', '1.23456e+5', '-2.5e-300')
>>> fmt(0.1, FLOAT32), fmt(1 / 3, max_digits=6)
('0.1', '0.333333')
"""

from fractions import Fraction

from cstfmt.float_layout import DecomposedFloat, FloatClass, FloatLayout
from cstfmt.numeric import approx_log10, decimal_digits, floor_int, pow10
from cstfmt.serialization import Serializer

FIXED_NOTATION_MIN_EXPONENT = -4
FIXED_NOTATION_MAX_EXPONENT = 4


def max_length_float(layout: FloatLayout, *, max_digits: int) -> int:
    """ Worst case over both notations.

    Scientific: sign, point, digits, `e`, exponent sign and exponent digits. Fixed: sign, `0.`, the leading zeros of
    the smallest fixed exponent and the digits.
    """
    scientific = 1 + 1 + max_digits + 1 + 1 + layout.exponent_digits
    fixed = 1 + 2 + (-FIXED_NOTATION_MIN_EXPONENT - 1) + max_digits
    return max(scientific, fixed)


def encode_float(serializer: Serializer, value: float, layout: FloatLayout, *, min_digits: int,
                 max_digits: int) -> None:
    """ Write the shortest text with at least `min_digits` significant digits that reads back as `value`.

    When no text shorter than `max_digits` reads back, `max_digits` digits are written, which is always the case when
    both are equal. This module's docstring has more details and examples.
    """
    assert 1 <= min_digits <= max_digits
    parts = layout.decompose(value)
    if parts.negative:
        serializer.write_byte(ord('-'))

    if parts.float_class is FloatClass.NAN:
        serializer.write_ascii('nan')
        return
    if parts.float_class is FloatClass.INFINITE:
        serializer.write_ascii('inf')
        return
    if parts.float_class is FloatClass.ZERO:
        serializer.write_digit(0)
        return

    guess = _estimate_exponent10(parts)
    for n_digits in range(min_digits, max_digits + 1):
        scaled, exponent10 = _round_to_digits(parts, guess, n_digits)
        if n_digits == max_digits or _reads_back(parts, scaled, exponent10, n_digits):
            break

    digits = decimal_digits(scaled)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
    _write_digits(serializer, digits, exponent10)


def _estimate_exponent10(parts: DecomposedFloat) -> int:
    """Guess `floor(log10(value))`, may be off by one."""
    length = parts.significand.bit_length()
    mantissa = parts.significand / (1 << length)
    return floor_int(approx_log10(mantissa, parts.exponent + length))


def _scaled(parts: DecomposedFloat, shift10: int) -> tuple[int, int]:
    """Exact `value * 10**shift10` as a numerator and denominator."""
    numerator = parts.significand
    denominator = 1
    if parts.exponent >= 0:
        numerator <<= parts.exponent
    else:
        denominator <<= -parts.exponent
    if shift10 >= 0:
        numerator *= pow10(shift10)
    else:
        denominator *= pow10(-shift10)
    return numerator, denominator


def _round_to_digits(parts: DecomposedFloat, exponent10: int, n_digits: int) -> tuple[int, int]:
    """Round the value to `n_digits` significant digits.

    Returns the digits as an integer in [10**(n_digits-1), 10**n_digits) and the decimal exponent of the first one.
    """
    lower = pow10(n_digits - 1)
    upper = lower * 10
    while True:
        numerator, denominator = _scaled(parts, n_digits - 1 - exponent10)
        truncated, remainder = divmod(numerator, denominator)
        if truncated < lower:
            exponent10 -= 1
        elif truncated >= upper:
            exponent10 += 1
        else:
            break

    if 2 * remainder > denominator or (2 * remainder == denominator and truncated % 2 == 1):
        truncated += 1
    if truncated == upper:
        # 9.99...95 rounds to 10.0...0
        truncated = lower
        exponent10 += 1
    return truncated, exponent10


def _reads_back(parts: DecomposedFloat, scaled: int, exponent10: int, n_digits: int) -> bool:
    """Whether a correctly rounding parser turns `scaled * 10**(exponent10 - n_digits + 1)` back into the value."""
    ulp = Fraction(2) ** parts.exponent
    value = parts.significand * ulp
    high = value + ulp / 2
    low = value - (ulp / 4 if parts.narrow_gap_below else ulp / 2)
    text_value = scaled * Fraction(10) ** (exponent10 - n_digits + 1)
    if low < text_value < high:
        return True
    # halfway between two floats, parsers round to the even significand
    return text_value in (low, high) and parts.significand % 2 == 0


def _write_digits(serializer: Serializer, digits: list[int], exponent10: int) -> None:
    scientific = not FIXED_NOTATION_MIN_EXPONENT <= exponent10 <= FIXED_NOTATION_MAX_EXPONENT
    if scientific:
        integer_part = digits[:1]
        fraction_part = digits[1:]
    elif exponent10 >= 0:
        integer_part = digits[:exponent10 + 1]
        integer_part += [0] * (exponent10 + 1 - len(integer_part))
        fraction_part = digits[exponent10 + 1:]
    else:
        integer_part = [0]
        fraction_part = [0] * (-exponent10 - 1) + digits

    for digit in integer_part:
        serializer.write_digit(digit)
    if fraction_part:
        serializer.write_byte(ord('.'))
        for digit in fraction_part:
            serializer.write_digit(digit)
    if scientific:
        serializer.write_byte(ord('e'))
        serializer.write_byte(ord('-' if exponent10 < 0 else '+'))
        for digit in decimal_digits(abs(exponent10)):
            serializer.write_digit(digit)
