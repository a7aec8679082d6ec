import random
from fractions import Fraction

import pytest

from cstfmt.encoding.float import encode_float, max_length_float
from cstfmt.float_layout import FLOAT16, FLOAT32, FLOAT64, FloatLayout
from cstfmt.serialization import Serializer


def encoded(value: float, layout: FloatLayout = FLOAT64, min_digits: int = 6, max_digits: int = 0) -> str:
    if not max_digits:
        max_digits = max(min_digits, layout.max_digits10)
    serializer = Serializer.build_fixed_buffer_serializer(max_length_float(layout, max_digits=max_digits))
    encode_float(serializer, layout.round_value(value), layout, min_digits=min_digits, max_digits=max_digits)
    length = serializer.cur_pos()
    return bytes(serializer.finalize()[:length]).decode('ascii')


def assert_reads_back(value: float, layout: FloatLayout, text: str) -> None:
    """Check that `value` is the float of `layout` nearest to `text`."""
    raw = layout.to_bits(value)
    assert raw >> (layout.bits - 1) == 0, 'only positive values are checked'
    target = Fraction(text)
    distance = abs(target - Fraction(value))
    max_finite = layout.to_bits(float('inf')) - 1
    neighbors = [raw - 1] if raw > 0 else []
    if raw < max_finite:
        neighbors.append(raw + 1)
    for neighbor_raw in neighbors:
        neighbor_distance = abs(target - Fraction(layout.from_bits(neighbor_raw)))
        assert distance <= neighbor_distance, (value, text)
        if distance == neighbor_distance:
            assert raw % 2 == 0, (value, text)


@pytest.mark.parametrize('value, expected', [
    (0.0, '0'),
    (-0.0, '-0'),
    (float('inf'), 'inf'),
    (float('-inf'), '-inf'),
    (float('nan'), 'nan'),
    (-float('nan'), '-nan'),
])
def test_special_values(value, expected):
    assert encoded(value) == expected


@pytest.mark.parametrize('layout', [FLOAT16, FLOAT32])
def test_special_values_of_narrow_layouts(layout):
    assert encoded(-0.0, layout) == '-0'
    assert encoded(float('inf'), layout) == 'inf'
    assert encoded(float('-inf'), layout) == '-inf'
    assert encoded(float('nan'), layout) == 'nan'


@pytest.mark.parametrize('value, expected', [
    (1.0, '1'),
    (0.5, '0.5'),
    (100.0, '100'),
    (12345.0, '12345'),
    (0.0001, '0.0001'),
    (0.001, '0.001'),
    (1e-5, '1e-5'),
    (123456.0, '1.23456e+5'),
    (245474.3012, '2.454743012e+5'),
    (123456789.0, '1.23456789e+8'),
    (1234.456789, '1234.456789'),
    (0.1 + 0.2, '0.30000000000000004'),
    (1 / 3, '0.3333333333333333'),
    (-2.5e-300, '-2.5e-300'),
    (1e22, '1e+22'),
    (1e16, '1e+16'),
    (1.7976931348623157e308, '1.7976931348623157e+308'),
    (5e-324, '4.94066e-324'),
])
def test_round_trip_text(value, expected):
    assert encoded(value) == expected


@pytest.mark.parametrize('value, expected', [
    (1 / 3, '0.333333'),
    (2 / 3, '0.666667'),
    (3.14159265, '3.14159'),
    (123456789.0, '1.23457e+8'),
    (1.5e-5, '1.5e-5'),
    (1234.456789, '1234.46'),
    (0.000123456789, '0.000123457'),
    # rounding carries into a new leading digit
    (9.9999996, '10'),
    (99999.96, '1e+5'),
    (0.99999951, '1'),
    (9.9999996e-5, '0.0001'),
])
def test_six_significant_digits(value, expected):
    assert encoded(value, max_digits=6) == expected


@pytest.mark.parametrize('value, digits, expected', [
    (2.5, 1, '2'),
    (3.5, 1, '4'),
    (9.5, 1, '10'),
    (0.25, 1, '0.2'),
    (0.375, 2, '0.38'),
    (0.125, 2, '0.12'),
    (3.14159, 3, '3.14'),
])
def test_rounds_half_to_even(value, digits, expected):
    assert encoded(value, min_digits=digits, max_digits=digits) == expected


@pytest.mark.parametrize('value, expected', [
    (2.0 ** -24, '5.96046e-8'),
    (2.0 ** -14, '6.10352e-5'),
    (65504.0, '65504'),
    (0.1, '0.0999756'),
    (1.0, '1'),
    (-2.0, '-2'),
])
def test_float16_text(value, expected):
    assert encoded(value, FLOAT16) == expected


@pytest.mark.parametrize('value, expected', [
    (0.1, '0.1'),
    (16777216.0, '1.6777216e+7'),
    (16777217.0, '1.6777216e+7'),
    (3.4028234663852886e38, '3.4028235e+38'),
    (1.401298464324817e-45, '1.4013e-45'),
])
def test_float32_text(value, expected):
    assert encoded(value, FLOAT32) == expected


def test_text_never_exceeds_the_max_length():
    widest = [
        (FLOAT64, -2.2250738585072014e-308),
        (FLOAT64, -1.2345678901234567e-100),
        (FLOAT64, -0.00012345678901234567),
        (FLOAT32, -1.17549435e-38),
        (FLOAT32, -0.00012345679),
        (FLOAT16, -0.00012302),
        (FLOAT16, -6.1e-5),
    ]
    for layout, value in widest:
        max_digits = max(6, layout.max_digits10)
        assert len(encoded(value, layout)) <= max_length_float(layout, max_digits=max_digits)


def test_float64_round_trips_through_bits():
    rng = random.Random(0x5eed)
    for _ in range(2000):
        raw = rng.getrandbits(63)
        value = FLOAT64.from_bits(raw)
        if value != value or value == float('inf'):
            continue
        text = encoded(value)
        assert len(text) <= 24
        assert FLOAT64.to_bits(float(text)) == raw, (raw, text)


def test_float32_round_trips():
    rng = random.Random(32)
    for _ in range(2000):
        raw = rng.getrandbits(31)
        value = FLOAT32.from_bits(raw)
        if value != value or value == float('inf'):
            continue
        assert_reads_back(value, FLOAT32, encoded(value, FLOAT32))


def test_float16_round_trips_exhaustively():
    for raw in range(0x7C00):
        value = FLOAT16.from_bits(raw)
        assert_reads_back(value, FLOAT16, encoded(value, FLOAT16))


@pytest.mark.parametrize('layout, seed', [(FLOAT16, 16), (FLOAT32, 0xf32)])
def test_narrow_floats_round_trip_through_struct(layout, seed):
    rng = random.Random(seed)
    max_finite = layout.to_bits(float('inf')) - 1
    for _ in range(2000):
        raw = rng.randint(0, max_finite)
        text = encoded(layout.from_bits(raw), layout)
        assert layout.to_bits(float(text)) == raw, (raw, text)
        assert layout.to_bits(float(encoded(-layout.from_bits(raw), layout))) == raw | (1 << (layout.bits - 1))


@pytest.mark.float_boundary
@pytest.mark.parametrize('value', [
    2.2250738585072014e-308,
    2.225073858507201e-308,
    2.2250738585072019e-308,
    4.450147717014403e-308,
    5e-324,
    1e-323,
    1e-310,
])
def test_float64_round_trips_around_the_smallest_normal(value):
    text = encoded(value)
    assert float(text) == value
    assert float(encoded(-value)) == -value


@pytest.mark.float_boundary
@pytest.mark.parametrize('layout', [FLOAT16, FLOAT32])
def test_narrow_floats_round_trip_around_the_smallest_normal(layout):
    smallest_normal = 1 << layout.fraction_bits
    for raw in range(smallest_normal - 16, smallest_normal + 16):
        value = layout.from_bits(raw)
        assert_reads_back(value, layout, encoded(value, layout))


def test_powers_of_two_use_the_narrow_gap_below():
    # 2**n has a neighbor below that is half as far as the one above
    for exponent in range(-1000, 1000, 37):
        value = 2.0 ** exponent
        assert float(encoded(value)) == value
