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

r"""
This module implements the `%s` conversion: bytes of a string argument are copied verbatim.

How many bytes are copied is a policy chosen by the caller, not something decided from the content:

>>> se = Serializer.build_fixed_buffer_serializer(16)
>>> encode_string(se, b'ab\x00cd', max_length=5, stop_at_zero=False)  # writes 6162006364
>>> encode_string(se, b'ab\x00cd', max_length=5, stop_at_zero=True)  # writes 6162
>>> encode_string(se, bytearray(b'hello world'), max_length=5, stop_at_zero=True)  # writes 68656c6c6f
>>> bytes(se.finalize()).hex()
'6162006364616268656c6c6f00000000'
"""

from cstfmt.serialization import Buffer, Serializer


def encode_string(serializer: Serializer, data: Buffer, *, max_length: int, stop_at_zero: bool) -> None:
    """ Copy up to `max_length` bytes of `data`, optionally stopping before the first zero byte.
    """
    chunk = bytes(memoryview(data).cast('B')[:max_length])
    if stop_at_zero:
        end = chunk.find(0)
        if end >= 0:
            chunk = chunk[:end]
    serializer.write_bytes(chunk)
