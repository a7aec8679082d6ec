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

from typing_extensions import override

from .exceptions import BufferOverflowError
from .serializer import Buffer, Serializer


class FixedBufferSerializer(Serializer):
    """Implementation of Serializer that writes into a preallocated buffer of fixed capacity.

    The buffer is allocated once, zero-filled, and never grows. The write cursor is the current position, writing past
    the capacity raises `BufferOverflowError` and leaves the buffer untouched.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError('capacity must not be negative')
        self._data = bytearray(capacity)
        self._pos: int = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def bytes_left(self) -> int:
        return len(self._data) - self._pos

    @override
    def finalize(self) -> memoryview:
        result = memoryview(self._data)
        del self._data
        del self._pos
        return result

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        if self._pos >= len(self._data):
            raise BufferOverflowError(f'buffer is full (capacity {len(self._data)})')
        # bytearray item assignment checks for correct range
        self._data[self._pos] = data
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        part = memoryview(data).cast('B')
        end = self._pos + len(part)
        if end > len(self._data):
            raise BufferOverflowError(f'writing {len(part)} bytes at {self._pos} exceeds capacity {len(self._data)}')
        self._data[self._pos:end] = part
        self._pos = end
