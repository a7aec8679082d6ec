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

from typing import Literal

from pydantic import field_validator

from cstfmt.utils.pydantic import BaseModel

# a float64 never needs more than 17 significant digits to read back
MAX_FLOAT_SIGNIFICANT_DIGITS: int = 17


class FormatSettings(BaseModel):
    # Number of significant digits a `%f` conversion starts with, trailing zeros are not written
    FLOAT_SIGNIFICANT_DIGITS: int = 6

    # When enabled, `%f` adds significant digits (up to what the float width needs) until the text reads back as the
    # exact same value, otherwise it always rounds to FLOAT_SIGNIFICANT_DIGITS
    FLOAT_ROUND_TRIP: bool = True

    # Write a zero byte right after the rendered text when the buffer has room for it
    WRITE_TERMINATOR: bool = True

    # Argument type used for plain Python `int` values: a signed integer of this width
    DEFAULT_INT_BITS: Literal[8, 16, 32, 64] = 32

    # Argument type used for plain Python `float` values
    DEFAULT_FLOAT_BITS: Literal[16, 32, 64] = 64

    @field_validator('FLOAT_SIGNIFICANT_DIGITS')
    @classmethod
    def check_significant_digits(cls, value: int) -> int:
        if not 1 <= value <= MAX_FLOAT_SIGNIFICANT_DIGITS:
            raise ValueError(f'FLOAT_SIGNIFICANT_DIGITS must be between 1 and {MAX_FLOAT_SIGNIFICANT_DIGITS}')
        return value
