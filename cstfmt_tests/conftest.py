import os

from cstfmt.conf import UNITTESTS_SETTINGS_FILEPATH

os.environ['CSTFMT_CONFIG_YAML'] = os.environ.get('CSTFMT_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)


def pytest_configure(config):
    config.addinivalue_line(
        'markers',
        'float_boundary: values around the smallest normal float, where the decimal exponent estimate is the least '
        'precise and rendering is known to be the weakest',
    )
