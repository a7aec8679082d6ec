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
Fixed-capacity format strings: the buffer size is computed from the template and the argument types, then arguments
are rendered into it.

>>> str(render('A number: %d', 42))
'A number: 42'
>>> estimate('A number: %d', INT32)
22
"""

from cstfmt.buffer import FormattedBuffer
from cstfmt.exception import (
    ArityMismatchError,
    CapacityError,
    FormatError,
    MalformedTemplateError,
    TemplateError,
    TypeMismatchError,
    UnsupportedFloatWidthError,
)
from cstfmt.format import CompiledFormat, compile_format, estimate, render
from cstfmt.types import (
    BOOL,
    CHAR,
    FLOAT16,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    ArgKind,
    ArgType,
    BoolType,
    CharType,
    CopyPolicy,
    FloatType,
    IntType,
    StrType,
    TypedArgument,
    cstr,
    cstr_ref,
    cstr_type,
    str_ref,
)
from cstfmt.version import __version__

__all__ = [
    'FormattedBuffer',
    'ArityMismatchError',
    'CapacityError',
    'FormatError',
    'MalformedTemplateError',
    'TemplateError',
    'TypeMismatchError',
    'UnsupportedFloatWidthError',
    'CompiledFormat',
    'compile_format',
    'estimate',
    'render',
    'BOOL',
    'CHAR',
    'FLOAT16',
    'FLOAT32',
    'FLOAT64',
    'INT8',
    'INT16',
    'INT32',
    'INT64',
    'UINT8',
    'UINT16',
    'UINT32',
    'UINT64',
    'ArgKind',
    'ArgType',
    'BoolType',
    'CharType',
    'CopyPolicy',
    'FloatType',
    'IntType',
    'StrType',
    'TypedArgument',
    'cstr',
    'cstr_ref',
    'cstr_type',
    'str_ref',
    '__version__',
]
