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
Two-phase rendering of format templates into fixed-capacity buffers.

Phase 1 only needs the template and the argument types: it scans the directives, selects a conversion for each one and
adds up the literal text and the maximum length of every conversion, plus one byte for a terminator. The result is a
`CompiledFormat`, which is cached and can be rendered any number of times.

Phase 2 walks the same directives again, copying literal text and running the encoders into a buffer of the computed
capacity. Every check happens before the buffer exists, so a render either fails early or fully succeeds.

>>> from cstfmt.types import INT32
>>> compiled = compile_format('A hex number: %x', INT32)
>>> compiled.capacity
25
>>> bytes(compiled.render(-42))
b'A hex number: 0xFFFFFFD6'
>>> render('%s: %d%%', 'ratio', 42)
Traceback (most recent call last):
    ...
cstfmt.exception.MalformedTemplateError: unknown format specifier b'%%' at position 6
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Sequence, Union

from structlog import get_logger

from cstfmt.buffer import FormattedBuffer
from cstfmt.conf.get_settings import get_global_settings
from cstfmt.conf.settings import FormatSettings
from cstfmt.directives import Conversion, select_conversion
from cstfmt.exception import ArityMismatchError, CapacityError, TypeMismatchError
from cstfmt.scanner import Directive, literal_spans, scan
from cstfmt.serialization import Serializer
from cstfmt.types import ArgType, TypedArgument, as_typed_argument

logger = get_logger()

Template = Union[str, bytes]

COMPILE_CACHE_SIZE = 256


@dataclass(frozen=True)
class CompiledFormat:
    """A template checked against argument types, with the capacity its renders need.

    Instances are immutable and can be shared, each render uses its own buffer.
    """
    template: bytes
    arg_types: tuple[ArgType, ...]
    directives: tuple[Directive, ...]
    conversions: tuple[Conversion, ...]
    capacity: int
    settings: FormatSettings

    def bind(self, args: Sequence[Any]) -> list[TypedArgument]:
        """Check that `args` match the argument types, plain values are converted to the expected type."""
        if len(args) != len(self.arg_types):
            raise ArityMismatchError(len(self.arg_types), len(args))
        bound = []
        for arg_type, arg in zip(self.arg_types, args):
            if isinstance(arg, TypedArgument):
                if arg.type != arg_type:
                    raise TypeMismatchError(f'expected an argument of type {arg_type}, got {arg.type}')
                bound.append(arg)
            else:
                bound.append(arg_type(arg))
        return bound

    def render(self, *args: Any, capacity: Optional[int] = None) -> FormattedBuffer:
        """Phase 2: write the arguments into a new buffer."""
        typed_args = self.bind(args)
        if capacity is None:
            capacity = self.capacity
        elif capacity < self.capacity:
            raise CapacityError(f'capacity {capacity} is smaller than the {self.capacity} bytes the format may need')

        template = memoryview(self.template)
        serializer = Serializer.build_fixed_buffer_serializer(capacity)
        start = 0
        for directive, conversion, arg in zip(self.directives, self.conversions, typed_args):
            serializer.write_bytes(template[start:directive.position])
            with serializer.with_max_bytes(conversion.max_length) as bounded:
                conversion.encode(bounded, arg.value, self.settings)
            start = directive.end
        serializer.write_bytes(template[start:])

        effective_length = serializer.cur_pos()
        terminated = self.settings.WRITE_TERMINATOR and serializer.bytes_left() > 0
        if terminated:
            serializer.write_byte(0)
        return FormattedBuffer(serializer.finalize(), effective_length, terminated=terminated)


def _as_template(template: Template) -> bytes:
    if isinstance(template, str):
        return template.encode('utf-8')
    if isinstance(template, (bytes, bytearray)):
        return bytes(template)
    raise TypeError(f'template must be str or bytes, got {type(template).__name__}')


def _capacity(template: bytes, directives: Sequence[Directive], conversions: Sequence[Conversion]) -> int:
    """Phase 1: literal text, plus the maximum length of every conversion, plus a terminator slot."""
    literals = sum(end - start for start, end in literal_spans(template, directives))
    return literals + sum(conversion.max_length for conversion in conversions) + 1


@lru_cache(maxsize=COMPILE_CACHE_SIZE)
def _compile(template: bytes, arg_types: tuple[ArgType, ...], settings: FormatSettings) -> CompiledFormat:
    directives = tuple(scan(template, arg_count=len(arg_types)))
    conversions = tuple(
        select_conversion(directive.kind, arg_type, settings)
        for directive, arg_type in zip(directives, arg_types)
    )
    capacity = _capacity(template, directives, conversions)
    log = logger.new(template=template)
    log.debug('format compiled', arg_types=[str(t) for t in arg_types], capacity=capacity)
    return CompiledFormat(template, arg_types, directives, conversions, capacity, settings)


def compile_format(template: Template, *arg_types: ArgType, settings: Optional[FormatSettings] = None
                   ) -> CompiledFormat:
    """Phase 1 for a template and the types of its arguments, in order.

    Raises MalformedTemplateError, ArityMismatchError or TypeMismatchError. Results are cached, compiling the same
    template with the same types and settings again returns the same object.
    """
    for arg_type in arg_types:
        if not isinstance(arg_type, ArgType):
            raise TypeMismatchError(f'expected an argument type, got {arg_type!r}')
    if settings is None:
        settings = get_global_settings()
    return _compile(_as_template(template), tuple(arg_types), settings)


def estimate(template: Template, *arg_types: ArgType, settings: Optional[FormatSettings] = None) -> int:
    """Capacity needed to render `template` with arguments of the given types, terminator slot included."""
    return compile_format(template, *arg_types, settings=settings).capacity


def render(fmt: Union[Template, CompiledFormat], *args: Any, capacity: Optional[int] = None,
           settings: Optional[FormatSettings] = None) -> FormattedBuffer:
    """Render arguments with a template or with a compiled format.

    With a template, argument types come from the arguments: typed arguments keep theirs and plain Python values are
    promoted (see `cstfmt.types.as_typed_argument`). A compiled format renders with the settings it was compiled with.
    An explicit `capacity` must be at least what the format may need.
    """
    if isinstance(fmt, CompiledFormat):
        return fmt.render(*args, capacity=capacity)
    if settings is None:
        settings = get_global_settings()
    typed_args = [
        as_typed_argument(arg, default_int_bits=settings.DEFAULT_INT_BITS,
                          default_float_bits=settings.DEFAULT_FLOAT_BITS)
        for arg in args
    ]
    compiled = compile_format(fmt, *(arg.type for arg in typed_args), settings=settings)
    return compiled.render(*typed_args, capacity=capacity)
