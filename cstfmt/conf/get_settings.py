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
from typing import NamedTuple, Optional

from structlog import get_logger

from cstfmt.conf.settings import FormatSettings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'CSTFMT_CONFIG_YAML'


class _SettingsMetadata(NamedTuple):
    source: str
    settings: FormatSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_global_settings() -> FormatSettings:
    """
    Returns the global settings.

    They are loaded from the yaml filepath in the 'CSTFMT_CONFIG_YAML' env var, or from the packaged defaults when it
    is not set. Every public operation also accepts explicit settings, which bypass this.
    """
    from cstfmt import conf
    settings_yaml_filepath = os.environ.get(CONFIG_YAML_ENV_VAR, conf.DEFAULT_SETTINGS_FILEPATH)
    return _load_settings_singleton(settings_yaml_filepath)


def get_settings_source() -> str:
    """ Returns the path of the YAML file that was loaded.

    XXX: Will raise an assertion error if get_global_settings() wasn't used before.
    """
    global _settings_singleton
    assert _settings_singleton is not None, 'get_global_settings() not called before'
    return _settings_singleton.source


def _load_settings_singleton(source: str) -> FormatSettings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _settings_singleton.settings

    _settings_singleton = _SettingsMetadata(source=source, settings=load_yaml_settings(source))
    return _settings_singleton.settings


def load_yaml_settings(filepath: str) -> FormatSettings:
    """
    Load and validate settings from a yaml file. The file may use the `extends` key to be merged over another one,
    relative paths that are not found next to the file are looked up among the packaged settings.
    """
    from cstfmt.utils.yaml import model_from_extended_yaml
    log = logger.new(filepath=filepath)
    settings = model_from_extended_yaml(FormatSettings, filepath=filepath, custom_root=Path(__file__).parent)
    log.debug('settings loaded', **settings.model_dump())
    return settings
