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
Integer and floating point helpers used by the estimators and encoders.

Nothing here delegates to a formatting routine or to `math.log`: digit counts come from repeated division, powers
from repeated multiplication and the logarithm used to guess a decimal exponent is a series expansion. Callers that
need an exact answer (the float encoder) only use `approx_log10` as a starting guess and correct it with integer
arithmetic.

>>> count_digits(0), count_digits(9), count_digits(10), count_digits(2**64 - 1)
(0, 1, 2, 20)
>>> count_hex_digits(0xFFFFFFD6)
8
>>> decimal_digits(4096)
[4, 0, 9, 6]
>>> hex_digits(0x2A)
[2, 10]
>>> floor_int(-0.5), floor_int(2.0), floor_int(2.7)
(-1, 2, 2)
"""

LN2 = 0.6931471805599453
LN10 = 2.302585092994046

# series terms below this are lost in a float sum
_SERIES_EPSILON = 1e-18


def count_digits(x: int) -> int:
    """Number of decimal digits needed to represent a non-negative integer, `0` has no digits."""
    assert x >= 0
    i = 0
    while x > 0:
        x //= 10
        i += 1
    return i


def count_hex_digits(x: int) -> int:
    """Number of hexadecimal digits needed to represent a non-negative integer, `0` has no digits."""
    assert x >= 0
    i = 0
    while x > 0:
        x >>= 4
        i += 1
    return i


def pow10(p: int) -> int:
    """Returns 10^p, integers only."""
    assert p >= 0
    a = 1
    for _ in range(p):
        a *= 10
    return a


def pow16(p: int) -> int:
    """Returns 16^p, integers only."""
    assert p >= 0
    return 1 << (4 * p)


def decimal_digits(x: int) -> list[int]:
    """Decimal digits of a non-negative integer, most significant first. Zero has the single digit 0."""
    n = max(count_digits(x), 1)
    a = pow10(n - 1)
    digits = []
    for _ in range(n):
        digits.append(x // a)
        x %= a
        a //= 10
    return digits


def hex_digits(x: int) -> list[int]:
    """Hexadecimal digits of a non-negative integer, most significant first. Zero has the single digit 0."""
    n = max(count_hex_digits(x), 1)
    a = pow16(n - 1)
    digits = []
    for _ in range(n):
        digits.append(x // a)
        x %= a
        a >>= 4
    return digits


def floor_int(x: float) -> int:
    """Largest integer less than or equal to `x`."""
    i = int(x)
    if x < i:
        i -= 1
    return i


def approx_ln(mantissa: float, exponent2: int = 0) -> float:
    """Natural logarithm of `mantissa * 2**exponent2`.

    The mantissa is first brought into [0.5, 1) by moving powers of two into the exponent, then

        ln(m) = 2 * (z + z**3/3 + z**5/5 + ...),  z = (m - 1) / (m + 1)

    which converges quickly since |z| <= 1/3 in that range.
    """
    if mantissa <= 0:
        raise ValueError('logarithm of a non-positive number')
    while mantissa >= 1.0:
        mantissa /= 2
        exponent2 += 1
    while mantissa < 0.5:
        mantissa *= 2
        exponent2 -= 1
    z = (mantissa - 1) / (mantissa + 1)
    z2 = z * z
    power = z
    total = 0.0
    n = 1
    while abs(power) / n > _SERIES_EPSILON:
        total += power / n
        power *= z2
        n += 2
    return 2 * total + exponent2 * LN2


def approx_log10(mantissa: float, exponent2: int = 0) -> float:
    """Base 10 logarithm of `mantissa * 2**exponent2`, see `approx_ln`."""
    return approx_ln(mantissa, exponent2) / LN10
