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

from typing import Any


class FormattedBuffer:
    """Result of a render: a fixed-capacity byte buffer and the number of bytes actually written to it.

    The capacity only depends on the template and the argument types, the effective length is never larger. Bytes past
    the effective length are zero.
    """

    __slots__ = ('_data', '_effective_length', '_terminated')

    def __init__(self, data: memoryview, effective_length: int, *, terminated: bool) -> None:
        assert 0 <= effective_length <= len(data)
        assert not terminated or effective_length < len(data)
        self._data = data.toreadonly()
        self._effective_length = effective_length
        self._terminated = terminated

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def effective_length(self) -> int:
        return self._effective_length

    @property
    def terminated(self) -> bool:
        """Whether a zero byte was written right after the effective bytes."""
        return self._terminated

    def view(self) -> memoryview:
        """Read-only view of the effective bytes."""
        return self._data[:self._effective_length]

    def text(self, encoding: str = 'utf-8', errors: str = 'strict') -> str:
        return bytes(self.view()).decode(encoding, errors)

    def cstr(self) -> bytes:
        """The effective bytes followed by the terminator, only available when one was written."""
        if not self._terminated:
            raise ValueError('buffer is not zero-terminated')
        return bytes(self._data[:self._effective_length + 1])

    def as_tuple(self) -> tuple[bytes, int]:
        """The whole buffer and the effective length."""
        return bytes(self._data), self._effective_length

    def __bytes__(self) -> bytes:
        return bytes(self.view())

    def __str__(self) -> str:
        return self.text()

    def __len__(self) -> int:
        return self._effective_length

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FormattedBuffer):
            return bytes(self) == bytes(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        if isinstance(other, str):
            return bytes(self) == other.encode('utf-8')
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'FormattedBuffer({bytes(self)!r}, capacity={self.capacity})'
