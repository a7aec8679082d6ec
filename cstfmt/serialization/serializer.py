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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

from typing_extensions import Self

if TYPE_CHECKING:
    from .adapters import MaxBytesSerializer
    from .fixed_buffer_serializer import FixedBufferSerializer

Buffer = Union[bytes, bytearray, memoryview]


class Serializer(ABC):
    def finalize(self) -> memoryview:
        """Get the resulting byte sequence, the serializer cannot be reused after this."""
        raise TypeError('this serializer does not support finalization')

    @abstractmethod
    def cur_pos(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, data: int) -> None:
        """Write a single byte."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        # XXX: it is recommended that implementors of Serializer specialize this implementation
        for byte in bytes(memoryview(data)):
            self.write_byte(byte)

    def write_ascii(self, text: str) -> None:
        """Write a short ASCII-only literal, like a `0x` prefix or `nan`."""
        self.write_bytes(text.encode('ascii'))

    def write_digit(self, digit: int) -> None:
        """Write a single digit in the 0-15 range as an uppercase character."""
        assert 0 <= digit < 16, digit
        self.write_byte(0x30 + digit if digit < 10 else 0x41 + digit - 10)

    def with_max_bytes(self, max_bytes: int) -> MaxBytesSerializer[Self]:
        """Helper method to wrap the current serializer with MaxBytesSerializer."""
        from .adapters import MaxBytesSerializer
        return MaxBytesSerializer(self, max_bytes)

    @staticmethod
    def build_fixed_buffer_serializer(capacity: int) -> FixedBufferSerializer:
        from .fixed_buffer_serializer import FixedBufferSerializer
        return FixedBufferSerializer(capacity)
