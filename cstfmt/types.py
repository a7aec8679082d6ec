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
Argument types accepted by the directives.

An `ArgType` is the static part of an argument: it is all the estimators look at, so the capacity of a format only
depends on the template and on these types. Calling an `ArgType` with a value checks the value and binds both into a
`TypedArgument`:

>>> INT32(-42)
TypedArgument(type=IntType(bits=32, signed=True), value=-42)
>>> UINT8(256)
Traceback (most recent call last):
    ...
ValueError: 256 is out of range for uint8 [0, 255]

String arguments are built through one of the adapters, which only differ on the copy policy and on where the maximum
length comes from:

>>> str_ref('a\\x00b').type
StrType(max_length=3, policy=<CopyPolicy.COPY_ALL: 'copy_all'>)
>>> cstr_ref(b'hello\\x00').type
StrType(max_length=6, policy=<CopyPolicy.STOP_AT_ZERO: 'stop_at_zero'>)
>>> cstr(bytearray(16)).type
StrType(max_length=16, policy=<CopyPolicy.STOP_AT_ZERO: 'stop_at_zero'>)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from cstfmt.exception import TypeMismatchError
from cstfmt.float_layout import get_float_layout

StrValue = Union[bytes, bytearray, memoryview]

_INT_WIDTHS = (8, 16, 32, 64)


class ArgKind(Enum):
    SIGNED_INT = 'signed_int'
    UNSIGNED_INT = 'unsigned_int'
    BOOL = 'bool'
    FLOAT = 'float'
    CHAR = 'char'
    STRING = 'string'


class CopyPolicy(Enum):
    # copy every byte up to the length, zero bytes included
    COPY_ALL = 'copy_all'
    # copy up to the length, stopping before the first zero byte
    STOP_AT_ZERO = 'stop_at_zero'


class ArgType(ABC):
    @property
    @abstractmethod
    def kind(self) -> ArgKind:
        raise NotImplementedError

    @abstractmethod
    def validate(self, value: Any) -> Any:
        """Check that `value` can be rendered with this type and return it in the form the encoders expect."""
        raise NotImplementedError

    def __call__(self, value: Any) -> 'TypedArgument':
        return TypedArgument(self, self.validate(value))

    def _mismatch(self, value: Any) -> TypeMismatchError:
        return TypeMismatchError(f'{type(value).__name__} value cannot be used as {self}')


@dataclass(frozen=True)
class IntType(ArgType):
    bits: int
    signed: bool

    def __post_init__(self) -> None:
        if self.bits not in _INT_WIDTHS:
            raise ValueError(f'unsupported integer width: {self.bits}')

    def __str__(self) -> str:
        return f'{"" if self.signed else "u"}int{self.bits}'

    @property
    def kind(self) -> ArgKind:
        return ArgKind.SIGNED_INT if self.signed else ArgKind.UNSIGNED_INT

    def lower_bound(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    def upper_bound(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def validate(self, value: Any) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise self._mismatch(value)
        if not self.lower_bound() <= value <= self.upper_bound():
            raise ValueError(f'{value} is out of range for {self} [{self.lower_bound()}, {self.upper_bound()}]')
        return value


@dataclass(frozen=True)
class BoolType(ArgType):
    def __str__(self) -> str:
        return 'bool'

    @property
    def kind(self) -> ArgKind:
        return ArgKind.BOOL

    def validate(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise self._mismatch(value)
        return value


@dataclass(frozen=True)
class FloatType(ArgType):
    bits: int

    def __str__(self) -> str:
        return f'float{self.bits}'

    @property
    def kind(self) -> ArgKind:
        return ArgKind.FLOAT

    def validate(self, value: Any) -> float:
        if not isinstance(value, (float, int)) or isinstance(value, bool):
            raise self._mismatch(value)
        return get_float_layout(self.bits).round_value(float(value))


@dataclass(frozen=True)
class CharType(ArgType):
    def __str__(self) -> str:
        return 'char'

    @property
    def kind(self) -> ArgKind:
        return ArgKind.CHAR

    def validate(self, value: Any) -> int:
        if isinstance(value, str):
            data = value.encode('utf-8')
        elif isinstance(value, (bytes, bytearray)):
            data = bytes(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value <= 0xFF:
                raise ValueError(f'{value} is not a single byte')
            return value
        else:
            raise self._mismatch(value)
        if len(data) != 1:
            raise ValueError(f'{value!r} is not a single byte character')
        return data[0]


@dataclass(frozen=True)
class StrType(ArgType):
    max_length: int
    policy: CopyPolicy

    def __post_init__(self) -> None:
        if self.max_length < 0:
            raise ValueError('max_length must not be negative')

    def __str__(self) -> str:
        return f'str[{self.max_length}, {self.policy.value}]'

    @property
    def kind(self) -> ArgKind:
        return ArgKind.STRING

    def validate(self, value: Any) -> StrValue:
        if isinstance(value, str):
            value = value.encode('utf-8')
        if isinstance(value, memoryview):
            # lengths are always counted in bytes, whatever the item size of the view
            if not value.c_contiguous:
                raise TypeMismatchError(f'non-contiguous memoryview cannot be used as {self}')
            value = value.cast('B')
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise self._mismatch(value)
        # longer values are cut to `max_length` when rendered, mutable buffers may still change until then
        return value


@dataclass(frozen=True)
class TypedArgument:
    type: ArgType
    value: Any


INT8 = IntType(8, signed=True)
INT16 = IntType(16, signed=True)
INT32 = IntType(32, signed=True)
INT64 = IntType(64, signed=True)
UINT8 = IntType(8, signed=False)
UINT16 = IntType(16, signed=False)
UINT32 = IntType(32, signed=False)
UINT64 = IntType(64, signed=False)
BOOL = BoolType()
FLOAT16 = FloatType(16)
FLOAT32 = FloatType(32)
FLOAT64 = FloatType(64)
CHAR = CharType()


def _as_bytes(data: Union[str, bytes]) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


def str_ref(data: Union[str, bytes]) -> TypedArgument:
    """View of a string with a known length, every byte is copied (zero bytes included)."""
    raw = _as_bytes(data)
    return StrType(len(raw), CopyPolicy.COPY_ALL)(raw)


def cstr_ref(data: Union[str, bytes]) -> TypedArgument:
    """Static character array, the declared length is the array length and copying stops at the first zero byte."""
    raw = _as_bytes(data)
    return StrType(len(raw), CopyPolicy.STOP_AT_ZERO)(raw)


def cstr_type(capacity: int) -> StrType:
    """Type of a bounded mutable buffer, for compiling formats ahead of time.

    Values longer than `capacity` bytes are accepted and cut to `capacity` when rendered, for immutable `bytes` as well
    as for mutable buffers.
    """
    return StrType(capacity, CopyPolicy.STOP_AT_ZERO)


def cstr(buffer: Union[bytearray, memoryview], capacity: Union[int, None] = None) -> TypedArgument:
    """Bounded mutable buffer, up to `capacity` bytes are copied (stopping at the first zero byte).

    The capacity defaults to the size of the buffer in bytes. The buffer is not copied, it is read when the format is
    rendered.
    """
    if capacity is None:
        capacity = memoryview(buffer).nbytes
    return cstr_type(capacity)(buffer)


def as_typed_argument(value: Any, *, default_int_bits: int, default_float_bits: int) -> TypedArgument:
    """Promote a plain Python value to a typed argument, based on its Python type only."""
    if isinstance(value, TypedArgument):
        return value
    if isinstance(value, bool):
        return BOOL(value)
    if isinstance(value, int):
        return IntType(default_int_bits, signed=True)(value)
    if isinstance(value, float):
        return FloatType(default_float_bits)(value)
    if isinstance(value, (str, bytes)):
        return str_ref(value)
    if isinstance(value, (bytearray, memoryview)):
        return cstr(value)
    raise TypeMismatchError(f'cannot infer an argument type for {type(value).__name__} value {value!r}')
