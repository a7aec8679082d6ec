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


class FormatError(Exception):
    """Base class for exceptions in cstfmt."""
    pass


class TemplateError(FormatError):
    """Raised when a template cannot be used with the given arguments, before anything is rendered.
    """
    pass


class MalformedTemplateError(TemplateError, ValueError):
    """Raised for a dangling `%` or a `%` followed by an unknown directive character."""

    def __init__(self, message: str, *, position: int) -> None:
        super().__init__(f'{message} at position {position}')
        self.position = position


class ArityMismatchError(TemplateError):
    """Raised when the number of directives and the number of arguments differ."""

    def __init__(self, expected: int, given: int) -> None:
        if given > expected:
            message = f'too many arguments for format string: expected {expected}, got {given}'
        else:
            message = f'not enough arguments for format string: expected {expected}, got {given}'
        super().__init__(message)
        self.expected = expected
        self.given = given


class TypeMismatchError(FormatError, TypeError):
    """Raised when an argument type is not accepted by the directive it is matched with.
    """
    pass


class UnsupportedFloatWidthError(TypeMismatchError):
    """Raised when a float type has a bit width whose layout is not known."""
    pass


class CapacityError(FormatError):
    """Raised when an explicit capacity is smaller than what the template and argument types may need."""
    pass
