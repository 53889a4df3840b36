"""Data segments of a QR Code symbol: validation, size estimates and bit encoding."""

from __future__ import annotations

from dataclasses import dataclass

from . import qrspec
from .qrspec import Mode

MODE_INDICATOR_SIZE = 4
STRUCTURE_HEADER_SIZE = 20
MAX_STRUCTURED_SYMBOLS = 16

# Alphanumeric code of each 7-bit character, -1 where not encodable.
AN_TABLE = (
    -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1,
    -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1,
    36, -1, -1, -1, 37, 38, -1, -1, -1, -1, 39, 40, -1, 41, 42, 43,
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 44, -1, -1, -1, -1, -1,
    -1, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24,
    25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, -1, -1, -1, -1, -1,
    -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1,
    -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1,
)


class BitStream:
    """A growable sequence of bits, written most significant bit first."""

    def __init__(self) -> None:
        self._value = 0
        self._length = 0

    def __len__(self) -> int:
        return self._length

    @property
    def size(self) -> int:
        """Number of bits held."""
        return self._length

    def clear(self) -> None:
        """Drop every bit."""
        self._value = 0
        self._length = 0

    def append_num(self, bits: int, value: int) -> None:
        """Append the low ``bits`` bits of ``value``."""
        if bits < 0:
            raise ValueError(f"negative bit count: {bits}")
        self._value = (self._value << bits) | (value & ((1 << bits) - 1))
        self._length += bits

    def append_bytes(self, data: bytes) -> None:
        """Append every byte of ``data``, eight bits each."""
        raw = bytes(data)
        self.append_num(len(raw) * 8, int.from_bytes(raw, "big"))

    def extend(self, other: BitStream) -> None:
        """Append the bits of another stream."""
        self.append_num(other._length, other._value)

    def to_bytes(self) -> bytes:
        """Pack the bits into bytes; a last partial byte is padded with zeros."""
        if self._length == 0:
            return b""
        pad = -self._length % 8
        return (self._value << pad).to_bytes((self._length + pad) // 8, "big")


def look_an_table(c: int | str) -> int:
    """Return the alphanumeric code of character ``c``, or -1."""
    code = ord(c) if isinstance(c, str) else c
    if code < 0 or code & 0x80 or code > 0x7F:
        return -1
    return AN_TABLE[code]


def _check_num(data: bytes) -> bool:
    return all(0x30 <= byte <= 0x39 for byte in data)


def _check_an(data: bytes) -> bool:
    return all(look_an_table(byte) >= 0 for byte in data)


def _check_kanji(data: bytes) -> bool:
    if len(data) & 1:
        return False
    for high, low in zip(data[::2], data[1::2]):
        val = (high << 8) | low
        if val < 0x8140 or 0x9FFC < val < 0xE040 or val > 0xEBBF:
            return False
    return True


def check(mode: int, data: bytes) -> bool:
    """Return whether ``data`` is valid, non-empty input for ``mode``."""
    data = bytes(data)
    if not data:
        return False
    try:
        mode = Mode(mode)
    except ValueError:
        return False
    if mode == Mode.NUM:
        return _check_num(data)
    if mode == Mode.AN:
        return _check_an(data)
    if mode == Mode.KANJI:
        return _check_kanji(data)
    if mode in (Mode.BYTE, Mode.STRUCTURE, Mode.ECI, Mode.FNC1FIRST):
        return True
    if mode == Mode.FNC1SECOND:
        return len(data) == 1
    return False


@dataclass
class Entry:
    """One segment of input: a mode and its raw bytes."""

    mode: Mode
    data: bytes

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        if not check(self.mode, self.data):
            raise ValueError(f"invalid data for mode {self.mode!r}")
        self.mode = Mode(self.mode)

    @property
    def size(self) -> int:
        return len(self.data)


def estimate_bits_num(size: int) -> int:
    """Bits taken by ``size`` digits in numeric mode, without header."""
    words, rest = divmod(size, 3)
    return words * 10 + {1: 4, 2: 7}.get(rest, 0)


def estimate_bits_an(size: int) -> int:
    """Bits taken by ``size`` characters in alphanumeric mode, without header."""
    return (size // 2) * 11 + (6 if size & 1 else 0)


def estimate_bits_8(size: int) -> int:
    """Bits taken by ``size`` bytes in 8-bit mode, without header."""
    return size * 8


def estimate_bits_kanji(size: int) -> int:
    """Bits taken by ``size`` bytes of Shift-JIS kanji, without header."""
    return (size // 2) * 13


def _decode_eci(data: bytes) -> int:
    return int.from_bytes(data[:4], "little")


def _estimate_bits_eci(data: bytes) -> int:
    ecinum = _decode_eci(data)
    if ecinum < 128:
        return MODE_INDICATOR_SIZE + 8
    if ecinum < 16384:
        return MODE_INDICATOR_SIZE + 16
    return MODE_INDICATOR_SIZE + 24


def estimate_entry_bits(entry: Entry, version: int) -> int:
    """Estimate the encoded size of ``entry`` in bits, headers included."""
    if version == 0:
        version = 1
    mode = entry.mode
    if mode == Mode.NUM:
        bits = estimate_bits_num(entry.size)
    elif mode == Mode.AN:
        bits = estimate_bits_an(entry.size)
    elif mode == Mode.BYTE:
        bits = estimate_bits_8(entry.size)
    elif mode == Mode.KANJI:
        bits = estimate_bits_kanji(entry.size)
    elif mode == Mode.STRUCTURE:
        return STRUCTURE_HEADER_SIZE
    elif mode == Mode.ECI:
        bits = _estimate_bits_eci(entry.data)
    elif mode == Mode.FNC1FIRST:
        return MODE_INDICATOR_SIZE
    elif mode == Mode.FNC1SECOND:
        return MODE_INDICATOR_SIZE + 8
    else:
        return 0

    length = qrspec.length_indicator(mode, version)
    chunk = 1 << length
    count = entry.size // 2 if mode == Mode.KANJI else entry.size
    segments = (count + chunk - 1) // chunk
    return bits + segments * (MODE_INDICATOR_SIZE + length)


def _header(bstream: BitStream, mode_id: int, mode: Mode, version: int, count: int) -> None:
    bstream.append_num(4, mode_id)
    bstream.append_num(qrspec.length_indicator(mode, version), count)


def _encode_num(entry: Entry, bstream: BitStream, version: int) -> None:
    _header(bstream, qrspec.MODEID_NUM, Mode.NUM, version, entry.size)
    digits = entry.data.decode("ascii")
    whole = entry.size - entry.size % 3
    for start in range(0, whole, 3):
        bstream.append_num(10, int(digits[start:start + 3]))
    rest = digits[whole:]
    if len(rest) == 1:
        bstream.append_num(4, int(rest))
    elif len(rest) == 2:
        bstream.append_num(7, int(rest))


def _encode_an(entry: Entry, bstream: BitStream, version: int) -> None:
    _header(bstream, qrspec.MODEID_AN, Mode.AN, version, entry.size)
    codes = [look_an_table(byte) for byte in entry.data]
    for first, second in zip(codes[::2], codes[1::2]):
        bstream.append_num(11, first * 45 + second)
    if entry.size & 1:
        bstream.append_num(6, codes[-1])


def _encode_8(entry: Entry, bstream: BitStream, version: int) -> None:
    _header(bstream, qrspec.MODEID_8, Mode.BYTE, version, entry.size)
    bstream.append_bytes(entry.data)


def _encode_kanji(entry: Entry, bstream: BitStream, version: int) -> None:
    _header(bstream, qrspec.MODEID_KANJI, Mode.KANJI, version, entry.size // 2)
    for high, low in zip(entry.data[::2], entry.data[1::2]):
        val = (high << 8) | low
        val -= 0x8140 if val <= 0x9FFC else 0xC140
        bstream.append_num(13, (val >> 8) * 0xC0 + (val & 0xFF))


def _encode_structure(entry: Entry, bstream: BitStream, version: int) -> None:
    size, number, parity = entry.data[0], entry.data[1], entry.data[2]
    bstream.append_num(4, qrspec.MODEID_STRUCTURE)
    bstream.append_num(4, number - 1)
    bstream.append_num(4, size - 1)
    bstream.append_num(8, parity)


def _encode_eci(entry: Entry, bstream: BitStream, version: int) -> None:
    ecinum = _decode_eci(entry.data)
    if ecinum < 128:
        words, code = 1, ecinum
    elif ecinum < 16384:
        words, code = 2, 0x8000 + ecinum
    else:
        words, code = 3, 0xC0000 + ecinum
    bstream.append_num(4, qrspec.MODEID_ECI)
    bstream.append_num(words * 8, code)


def _encode_fnc1_second(entry: Entry, bstream: BitStream, version: int) -> None:
    bstream.append_num(4, qrspec.MODEID_FNC1SECOND)
    bstream.append_bytes(entry.data[:1])


_ENCODERS = {
    Mode.NUM: _encode_num,
    Mode.AN: _encode_an,
    Mode.BYTE: _encode_8,
    Mode.KANJI: _encode_kanji,
    Mode.STRUCTURE: _encode_structure,
    Mode.ECI: _encode_eci,
    Mode.FNC1SECOND: _encode_fnc1_second,
}


def encode_entry(entry: Entry, bstream: BitStream, version: int) -> int:
    """Append the encoding of ``entry`` to ``bstream``; return the bits added.

    An entry longer than one segment can hold is written as several segments.
    """
    start = len(bstream)
    words = qrspec.maximum_words(entry.mode, version)
    if words and entry.size > words:
        encode_entry(Entry(entry.mode, entry.data[:words]), bstream, version)
        encode_entry(Entry(entry.mode, entry.data[words:]), bstream, version)
    else:
        encoder = _ENCODERS.get(entry.mode)
        if encoder is not None:
            encoder(entry, bstream, version)
    return len(bstream) - start


def length_of_code(mode: int, version: int, bits: int) -> int:
    """Return how many bytes of ``mode`` data fit in one segment of ``bits`` bits."""
    payload = bits - 4 - qrspec.length_indicator(mode, version)
    if mode == Mode.NUM:
        chunks, rest = divmod(payload, 10)
        size = chunks * 3
        if rest >= 7:
            size += 2
        elif rest >= 4:
            size += 1
    elif mode == Mode.AN:
        chunks, rest = divmod(payload, 11)
        size = chunks * 2 + (1 if rest >= 6 else 0)
    elif mode in (Mode.BYTE, Mode.STRUCTURE):
        size = payload // 8
    elif mode == Mode.KANJI:
        size = (payload // 13) * 2
    else:
        size = 0
    maxsize = qrspec.maximum_words(mode, version)
    size = max(size, 0)
    if maxsize > 0:
        size = min(size, maxsize)
    return size