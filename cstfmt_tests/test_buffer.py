import pytest

from cstfmt.buffer import FormattedBuffer


def make_buffer(data: bytes, effective_length: int, terminated: bool) -> FormattedBuffer:
    return FormattedBuffer(memoryview(bytearray(data)), effective_length, terminated=terminated)


def test_terminated_buffer():
    buffer = make_buffer(b'abc\x00\x00', 3, True)
    assert buffer.capacity == 5
    assert buffer.effective_length == 3
    assert len(buffer) == 3
    assert buffer.terminated
    assert bytes(buffer) == b'abc'
    assert str(buffer) == 'abc'
    assert buffer.cstr() == b'abc\x00'
    assert buffer.as_tuple() == (b'abc\x00\x00', 3)


def test_full_buffer_is_not_terminated():
    buffer = make_buffer(b'abc', 3, False)
    assert not buffer.terminated
    assert bytes(buffer) == b'abc'
    with pytest.raises(ValueError, match='not zero-terminated'):
        buffer.cstr()


def test_view_is_read_only_and_bounded():
    buffer = make_buffer(b'hi\x00\x00', 2, True)
    view = buffer.view()
    assert view.readonly
    assert view.tobytes() == b'hi'
    with pytest.raises(TypeError):
        view[0] = 0


def test_text():
    buffer = make_buffer('ã!'.encode('utf-8') + b'\x00', 3, True)
    assert buffer.text() == 'ã!'
    assert make_buffer(b'\xff\x00', 1, True).text(errors='replace') == '\ufffd'
    with pytest.raises(UnicodeDecodeError):
        make_buffer(b'\xff\x00', 1, True).text()


def test_equality():
    buffer = make_buffer(b'abc\x00\x00', 3, True)
    assert buffer == b'abc'
    assert buffer == bytearray(b'abc')
    assert buffer == 'abc'
    assert buffer == make_buffer(b'abc\x00', 3, True)
    assert buffer != b'abc\x00'
    assert buffer != 'ab'
    assert buffer != 3


def test_not_hashable():
    with pytest.raises(TypeError):
        hash(make_buffer(b'\x00', 0, True))


def test_repr():
    assert repr(make_buffer(b'ok\x00', 2, True)) == "FormattedBuffer(b'ok', capacity=3)"
