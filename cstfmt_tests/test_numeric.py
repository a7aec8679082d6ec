import math

import pytest

from cstfmt.numeric import (
    approx_ln,
    approx_log10,
    count_digits,
    count_hex_digits,
    decimal_digits,
    floor_int,
    hex_digits,
    pow10,
    pow16,
)


@pytest.mark.parametrize('x, expected', [
    (0, 0),
    (1, 1),
    (9, 1),
    (10, 2),
    (99, 2),
    (100, 3),
    (2**31, 10),
    (2**32 - 1, 10),
    (2**63, 19),
    (2**64 - 1, 20),
])
def test_count_digits(x, expected):
    assert count_digits(x) == expected


@pytest.mark.parametrize('x, expected', [
    (0, 0),
    (1, 1),
    (15, 1),
    (16, 2),
    (0xFFFFFFD6, 8),
    (2**64 - 1, 16),
])
def test_count_hex_digits(x, expected):
    assert count_hex_digits(x) == expected


def test_powers():
    for p in range(0, 40):
        assert pow10(p) == 10 ** p
        assert pow16(p) == 16 ** p


def test_digits():
    assert decimal_digits(0) == [0]
    assert decimal_digits(1000) == [1, 0, 0, 0]
    assert decimal_digits(18446744073709551615) == [int(c) for c in '18446744073709551615']
    assert hex_digits(0) == [0]
    assert hex_digits(0xFFFFFFD6) == [15, 15, 15, 15, 15, 15, 13, 6]


@pytest.mark.parametrize('x, expected', [
    (0.0, 0),
    (0.5, 0),
    (1.0, 1),
    (-0.0, 0),
    (-0.5, -1),
    (-1.0, -1),
    (-1.5, -2),
    (307.99, 307),
    (-323.3, -324),
])
def test_floor_int(x, expected):
    assert floor_int(x) == expected


@pytest.mark.parametrize('x', [1e-300, 5e-324, 0.001, 0.5, 0.75, 1.0, 2.0, 10.0, 12345.678, 1.7976931348623157e308])
def test_approx_ln_and_log10(x):
    assert approx_ln(x) == pytest.approx(math.log(x), rel=1e-12, abs=1e-12)
    assert approx_log10(x) == pytest.approx(math.log10(x), rel=1e-12, abs=1e-12)


def test_approx_ln_with_binary_exponent():
    # 0.75 * 2**-1100 is below the float range as a single number
    expected = math.log(0.75) - 1100 * math.log(2)
    assert approx_ln(0.75, -1100) == pytest.approx(expected, rel=1e-12)
    assert approx_log10(0.5, 1) == pytest.approx(0.0, abs=1e-15)


def test_approx_ln_rejects_non_positive():
    with pytest.raises(ValueError):
        approx_ln(0.0)
    with pytest.raises(ValueError):
        approx_ln(-1.0)
