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

import os
from pathlib import Path
from typing import Any, Optional, TypeVar, Union

import yaml
from pydantic import BaseModel

from cstfmt.utils.dict import deep_merge

_EXTENDS_KEY = 'extends'

T = TypeVar('T', bound=BaseModel)


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Read a yaml file that must contain a mapping (an empty file is an empty mapping)."""
    if not os.path.isfile(filepath):
        raise ValueError(f"'{filepath}' is not a file")

    with open(filepath, 'r') as file:
        contents = yaml.safe_load(file)

    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")
    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str], custom_root: Optional[Path] = None) -> dict[str, Any]:
    """
    Read a yaml file following its chain of 'extends' keys, values of the extending file take precedence.

    An 'extends' value is a path relative to the file that contains it, or else relative to `custom_root`. The key
    itself is never part of the result. A file extending itself, directly or not, is an error.
    """
    chain: list[dict[str, Any]] = []
    seen: set[Path] = set()
    current: Optional[Path] = Path(filepath)
    while current is not None:
        resolved = current.resolve()
        if resolved in seen:
            raise ValueError(f"'{filepath}' has a recursive extension through '{current}'")
        seen.add(resolved)

        contents = dict_from_yaml(filepath=current)
        parent = contents.pop(_EXTENDS_KEY, None)
        chain.append(contents)
        current = _resolve_extended(current, parent, custom_root) if parent else None

    result: dict[str, Any] = {}
    for contents in reversed(chain):
        result = deep_merge(result, contents)
    return result


def _resolve_extended(filepath: Path, extended: Any, custom_root: Optional[Path]) -> Path:
    candidate = filepath.parent / str(extended)
    if not candidate.is_file() and custom_root is not None:
        candidate = custom_root / str(extended)
    return candidate


def model_from_extended_yaml(model: type[T], *, filepath: Union[Path, str], custom_root: Optional[Path] = None) -> T:
    """Takes a pydantic model and a filepath to a yaml file and returns a validated model instance."""
    return model.model_validate(dict_from_extended_yaml(filepath=filepath, custom_root=custom_root))
