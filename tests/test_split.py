import pytest

from slipqr import qrspec
from slipqr.qrinput import QRInput
from slipqr.qrspec import ECLevel, Mode
from slipqr.segments import check
from slipqr.split import identify_mode, split_string

KANJI = b"\x93\x5f\x93\x5f"


def _modes(qrinput):
    return [e.mode for e in qrinput.entries]


def _joined(qrinput):
    return b"".join(e.data for e in qrinput.entries)


@pytest.mark.parametrize(
    "data, hint, expected",
    [
        (b"1", Mode.BYTE, Mode.NUM),
        (b"A", Mode.BYTE, Mode.AN),
        (b"a", Mode.BYTE, Mode.BYTE),
        (b"", Mode.BYTE, Mode.NUL),
        (KANJI, Mode.KANJI, Mode.KANJI),
        (KANJI, Mode.BYTE, Mode.BYTE),
        (b"\x93", Mode.KANJI, Mode.BYTE),
    ],
)
def test_identify_mode(data, hint, expected):
    assert identify_mode(data, hint) == expected


def test_digits_only():
    qi = split_string("0123456789", QRInput())
    assert _modes(qi) == [Mode.NUM]
    assert _joined(qi) == b"0123456789"


def test_alphanumeric_only():
    qi = split_string("ABCDEFG", QRInput())
    assert _modes(qi) == [Mode.AN]
    assert _joined(qi) == b"ABCDEFG"


def test_lower_case_is_bytes_when_case_sensitive():
    qi = split_string("abc", QRInput())
    assert _modes(qi) == [Mode.BYTE]
    assert _joined(qi) == b"abc"


def test_lower_case_upper_cased_when_insensitive():
    qi = split_string("abc", QRInput(), case_sensitive=False)
    assert _modes(qi) == [Mode.AN]
    assert _joined(qi) == b"ABC"


def test_long_digit_run_after_byte():
    qi = split_string("a" + "1" * 20, QRInput())
    assert _modes(qi) == [Mode.BYTE, Mode.NUM]
    assert [e.data for e in qi.entries] == [b"a", b"1" * 20]


def test_kanji_with_hint():
    qi = split_string(KANJI, QRInput(), hint=Mode.KANJI)
    assert _modes(qi) == [Mode.KANJI]
    assert _joined(qi) == KANJI


def test_kanji_without_hint_is_bytes():
    qi = split_string(KANJI, QRInput())
    assert Mode.KANJI not in _modes(qi)
    assert _joined(qi) == KANJI


def test_kanji_not_upper_cased():
    data = b"\x88\x61abc"
    qi = split_string(data, QRInput(), hint=Mode.KANJI, case_sensitive=False)
    assert _joined(qi).startswith(b"\x88\x61")
    assert _joined(qi)[2:] == b"ABC"


@pytest.mark.parametrize(
    "text",
    ["Hello, World! 12345", "abc123DEF456ghi", "http://example.com/a?b=1", "0123ABCDabcd%$*+-./:"],
)
def test_split_is_lossless_and_valid(text):
    qi = split_string(text, QRInput())
    assert _joined(qi) == text.encode()
    assert all(check(e.mode, e.data) for e in qi.entries)


def test_split_result_encodes():
    qi = split_string("Hello, World! 0123456789", QRInput(0, ECLevel.M))
    stream = qi.byte_stream()
    assert len(stream) == qrspec.data_length(qi.version, ECLevel.M)


def test_stops_at_nul():
    qi = split_string(b"ABC\0def", QRInput())
    assert _joined(qi) == b"ABC"


@pytest.mark.parametrize("data", ["", b"", b"\0abc"])
def test_empty_raises(data):
    with pytest.raises(ValueError):
        split_string(data, QRInput())