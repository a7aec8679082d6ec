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
This module implements the `%x` conversion: a `0x` prefix followed by uppercase base 16 digits.

Digits are taken from the unsigned bit pattern of the given width, so negative numbers show their two's-complement
pattern and there are never leading zeros:

>>> se = Serializer.build_fixed_buffer_serializer(32)
>>> encode_hex(se, 42, bits=32)
>>> encode_hex(se, -42, bits=32)
>>> encode_hex(se, 0, bits=8)
>>> bytes(se.finalize()).rstrip(b'\\x00')
b'0x2A0xFFFFFFD60x0'
"""

from cstfmt.numeric import hex_digits
from cstfmt.serialization import Serializer

PREFIX = '0x'

BOOL_MAX_LENGTH = len(PREFIX) + 1


def max_length_hex(*, bits: int) -> int:
    return len(PREFIX) + (bits + 3) // 4


def encode_hex(serializer: Serializer, value: int, *, bits: int) -> None:
    serializer.write_ascii(PREFIX)
    for digit in hex_digits(value & ((1 << bits) - 1)):
        serializer.write_digit(digit)


def encode_bool_hex(serializer: Serializer, value: bool) -> None:
    serializer.write_ascii(PREFIX)
    serializer.write_digit(1 if value else 0)
