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
Directive scanner: finds the `%` markers of a template and the kind each one selects.

>>> scan(b'%d items at %f each')
[Directive(kind=<DirectiveKind.DECIMAL: 'd'>, position=0), Directive(kind=<DirectiveKind.FLOAT: 'f'>, position=12)]
>>> literal_spans(b'%d items at %f each', scan(b'%d items at %f each'))
[(0, 0), (2, 12), (14, 19)]
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from cstfmt.exception import ArityMismatchError, MalformedTemplateError

MARKER = ord('%')


class DirectiveKind(Enum):
    DECIMAL = 'd'
    HEX = 'x'
    FLOAT = 'f'
    STRING = 's'
    CHAR = 'c'


_KINDS_BY_BYTE: dict[int, DirectiveKind] = {ord(kind.value): kind for kind in DirectiveKind}


@dataclass(frozen=True)
class Directive:
    kind: DirectiveKind
    # offset of the `%`
    position: int

    @property
    def end(self) -> int:
        """Offset right after the directive character."""
        return self.position + 2


def scan(template: bytes, arg_count: Optional[int] = None) -> list[Directive]:
    """Return the directives of `template` in order.

    When `arg_count` is given the number of directives must be equal to it, otherwise ArityMismatchError is raised.
    """
    directives = []
    pos = template.find(MARKER)
    while pos != -1:
        if pos + 1 >= len(template):
            raise MalformedTemplateError("missing character after '%'", position=pos)
        kind = _KINDS_BY_BYTE.get(template[pos + 1])
        if kind is None:
            raise MalformedTemplateError(f'unknown format specifier {template[pos:pos + 2]!r}', position=pos)
        directives.append(Directive(kind, pos))
        pos = template.find(MARKER, pos + 2)

    if arg_count is not None and arg_count != len(directives):
        raise ArityMismatchError(len(directives), arg_count)
    return directives


def literal_spans(template: bytes, directives: Sequence[Directive]) -> list[tuple[int, int]]:
    """The (start, end) offsets of the literal text before each directive, plus the tail after the last one."""
    spans = []
    start = 0
    for directive in directives:
        spans.append((start, directive.position))
        start = directive.end
    spans.append((start, len(template)))
    return spans
