import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from cstfmt.conf import DEFAULT_SETTINGS_FILEPATH, UNITTESTS_SETTINGS_FILEPATH, get_global_settings, get_settings_source
from cstfmt.conf.get_settings import CONFIG_YAML_ENV_VAR, load_yaml_settings
from cstfmt.conf.settings import FormatSettings
from cstfmt.utils.yaml import dict_from_extended_yaml

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


def test_packaged_settings_are_the_defaults():
    assert load_yaml_settings(DEFAULT_SETTINGS_FILEPATH) == FormatSettings()
    assert load_yaml_settings(UNITTESTS_SETTINGS_FILEPATH) == FormatSettings()


def test_extended_settings():
    settings = load_yaml_settings(str(FIXTURES_DIR / 'round_trip_disabled.yml'))
    assert settings == FormatSettings(FLOAT_ROUND_TRIP=False, FLOAT_SIGNIFICANT_DIGITS=4)


def test_extension_chain():
    settings = load_yaml_settings(str(FIXTURES_DIR / 'chained.yml'))
    assert settings == FormatSettings(FLOAT_ROUND_TRIP=False, FLOAT_SIGNIFICANT_DIGITS=4, WRITE_TERMINATOR=False)
    assert 'extends' not in dict_from_extended_yaml(filepath=FIXTURES_DIR / 'chained.yml',
                                                    custom_root=Path(DEFAULT_SETTINGS_FILEPATH).parent)


@pytest.mark.parametrize(
    ['filename', 'error'],
    [
        ('invalid_digits.yml', 'Value error, FLOAT_SIGNIFICANT_DIGITS must be between 1 and 17'),
        ('invalid_int_bits.yml', 'DEFAULT_INT_BITS'),
        ('unknown_setting.yml', 'Extra inputs are not permitted'),
    ]
)
def test_invalid_settings(filename, error):
    with pytest.raises(ValidationError) as e:
        load_yaml_settings(str(FIXTURES_DIR / filename))
    assert error in str(e.value)


def test_recursive_extension():
    with pytest.raises(ValueError, match='recursive extension'):
        load_yaml_settings(str(FIXTURES_DIR / 'recursive_a.yml'))


def test_not_a_mapping():
    with pytest.raises(ValueError, match='cannot be parsed as a dictionary'):
        load_yaml_settings(str(FIXTURES_DIR / 'not_a_mapping.yml'))


def test_missing_file():
    with pytest.raises(ValueError, match='is not a file'):
        load_yaml_settings(str(FIXTURES_DIR / 'missing.yml'))


@pytest.mark.parametrize('digits', [0, 18])
def test_significant_digits_range(digits):
    with pytest.raises(ValidationError):
        FormatSettings(FLOAT_SIGNIFICANT_DIGITS=digits)


def test_settings_are_frozen_and_hashable():
    settings = FormatSettings()
    with pytest.raises(ValidationError):
        settings.FLOAT_ROUND_TRIP = False
    assert hash(settings) == hash(FormatSettings())
    assert hash(settings) != hash(FormatSettings(WRITE_TERMINATOR=False))


def test_global_settings_singleton(monkeypatch):
    settings = get_global_settings()
    assert settings is get_global_settings()
    assert get_settings_source() == os.environ[CONFIG_YAML_ENV_VAR]

    monkeypatch.setenv(CONFIG_YAML_ENV_VAR, str(FIXTURES_DIR / 'round_trip_disabled.yml'))
    with pytest.raises(Exception, match='loading config twice'):
        get_global_settings()
