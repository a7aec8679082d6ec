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
This module implements the `%d` conversion: base 10 text of integers and booleans.

>>> se = Serializer.build_fixed_buffer_serializer(32)
>>> encode_decimal(se, 42, bits=32, signed=True)
>>> encode_decimal(se, -128, bits=8, signed=True)
>>> encode_decimal(se, 2**64 - 1, bits=64, signed=False)
>>> encode_bool_decimal(se, True)
>>> bytes(se.finalize()).rstrip(b'\\x00')
b'42-128184467440737095516151'

>>> max_length_decimal(bits=32, signed=True), max_length_decimal(bits=32, signed=False)
(11, 10)
"""

from cstfmt.numeric import count_digits, decimal_digits
from cstfmt.serialization import Serializer

BOOL_MAX_LENGTH = 1


def max_length_decimal(*, bits: int, signed: bool) -> int:
    """ Number of digits of the largest magnitude, plus one for the minus sign of signed integers.
    """
    if signed:
        return count_digits(1 << (bits - 1)) + 1
    return count_digits((1 << bits) - 1)


def encode_decimal(serializer: Serializer, value: int, *, bits: int, signed: bool) -> None:
    """ Write an integer in base 10, most significant digit first.

    The magnitude of a negative number is taken from its unsigned two's-complement pattern, which also covers the
    minimum value of the width.
    """
    mask = (1 << bits) - 1
    pattern = value & mask
    if signed and value < 0:
        serializer.write_byte(ord('-'))
        pattern = -pattern & mask
    for digit in decimal_digits(pattern):
        serializer.write_digit(digit)


def encode_bool_decimal(serializer: Serializer, value: bool) -> None:
    serializer.write_digit(1 if value else 0)
