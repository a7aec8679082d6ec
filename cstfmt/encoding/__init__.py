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
This module holds the conversion encoders, one submodule per directive.

Each submodule `x` deals with a single conversion and looks like this:

    def max_length_x(...config params...) -> int:
        ...

    def encode_x(serializer: Serializer, value: ValueType, ...config params...) -> None:
        ...

`max_length_x` is the worst-case number of bytes `encode_x` may write for any value accepted with the same config
params, it must never depend on a value. The "config params" are specific to each encoder (bit width, float layout,
number of significant digits, ...). Submodules should not have to take into consideration how argument types are
mapped to encoders, that is done by `cstfmt.directives`.
"""
