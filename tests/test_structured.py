import pytest

from slipqr.qrinput import DataTooLargeError, QRInput
from slipqr.qrspec import ECLevel, Mode
from slipqr.structured import QRInputStruct, split_entry, split_input_to_struct


def _payload(qrinput):
    return b"".join(e.data for e in qrinput.entries if e.mode != Mode.STRUCTURE)


def test_append_input_returns_size():
    s = QRInputStruct()
    assert s.append_input(QRInput(1)) == 1
    assert s.append_input(QRInput(1)) == 2
    assert len(s) == 2


def test_single_input_gets_no_header():
    s = QRInputStruct()
    qi = QRInput(1)
    qi.append(Mode.NUM, b"123")
    s.append_input(qi)
    s.insert_structured_append_headers()
    assert [e.mode for e in qi.entries] == [Mode.NUM]
    assert s.parity is None


def test_headers_carry_size_number_and_parity():
    s = QRInputStruct()
    a = QRInput(1)
    a.append(Mode.BYTE, b"ab")
    b = QRInput(1)
    b.append(Mode.BYTE, b"cd")
    s.append_input(a)
    s.append_input(b)
    s.insert_structured_append_headers()
    expected_parity = a.parity() ^ b.parity()
    assert s.parity == expected_parity
    for number, qi in enumerate(s, start=1):
        header = qi.entries[0]
        assert header.mode == Mode.STRUCTURE
        assert header.data == bytes((2, number, expected_parity))


def test_preset_parity_is_used():
    s = QRInputStruct()
    for text in (b"x", b"y"):
        qi = QRInput(1)
        qi.append(Mode.BYTE, text)
        s.append_input(qi)
    s.parity = 0x42
    s.insert_structured_append_headers()
    assert all(qi.entries[0].data[2] == 0x42 for qi in s)


def test_parity_must_be_a_byte():
    s = QRInputStruct()
    s.parity = 7
    with pytest.raises(ValueError):
        s.parity = 256
    assert s.parity == 7


def test_split_entry():
    qi = QRInput(1)
    qi.append(Mode.BYTE, b"abcdef")
    split_entry(qi, 0, 2)
    assert [e.data for e in qi.entries] == [b"ab", b"cdef"]
    assert all(e.mode == Mode.BYTE for e in qi.entries)


def test_split_entry_rejects_empty_half():
    qi = QRInput(1)
    qi.append(Mode.BYTE, b"abc")
    with pytest.raises(ValueError):
        split_entry(qi, 0, 3)


def test_split_requires_fixed_version():
    qi = QRInput(0)
    qi.append(Mode.BYTE, b"abc")
    with pytest.raises(ValueError):
        split_input_to_struct(qi)


def test_small_input_stays_single():
    qi = QRInput(5, ECLevel.L)
    qi.append(Mode.NUM, b"0123456789")
    s = split_input_to_struct(qi)
    assert s.size == 1
    assert [e.mode for e in s.inputs[0].entries] == [Mode.NUM]
    assert _payload(s.inputs[0]) == b"0123456789"


def test_split_preserves_data_and_fits():
    data = bytes(range(30))
    qi = QRInput(1, ECLevel.H)
    qi.append(Mode.BYTE, data)
    s = split_input_to_struct(qi)
    assert s.size > 1
    assert b"".join(_payload(part) for part in s) == data
    assert s.parity == qi.parity()
    for number, part in enumerate(s, start=1):
        assert part.entries[0].data == bytes((s.size, number, qi.parity()))
        stream = part.byte_stream()
        assert part.version == 1
        assert len(stream) == 9
    # the original input is untouched
    assert [e.data for e in qi.entries] == [data]


def test_split_multiple_segments():
    qi = QRInput(1, ECLevel.H)
    qi.append(Mode.NUM, b"1234567890")
    qi.append(Mode.BYTE, b"hello world")
    s = split_input_to_struct(qi)
    assert b"".join(_payload(part) for part in s) == b"1234567890hello world"
    for part in s:
        part.byte_stream()
        assert part.version == 1


def test_too_many_symbols():
    qi = QRInput(1, ECLevel.H)
    qi.append(Mode.BYTE, b"x" * 500)
    with pytest.raises(DataTooLargeError):
        split_input_to_struct(qi)