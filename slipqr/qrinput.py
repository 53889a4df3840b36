"""Input data of a QR Code symbol and its conversion into padded codewords."""

from __future__ import annotations

from . import qrspec
from .qrspec import ECLevel, Mode
from .segments import (
    MAX_STRUCTURED_SYMBOLS,
    BitStream,
    Entry,
    encode_entry,
    estimate_entry_bits,
)

MAX_ECI = 999999

_PAD_CODEWORDS = (0xEC, 0x11)


class DataTooLargeError(ValueError):
    """Raised when the input does not fit in the chosen symbol."""


def _checked_version(version: int) -> int:
    if not 0 <= version <= qrspec.VERSION_MAX:
        raise ValueError(f"version {version} out of range 0..{qrspec.VERSION_MAX}")
    return version


def _checked_level(level: int) -> ECLevel:
    try:
        return ECLevel(level)
    except ValueError:
        raise ValueError(f"invalid error correction level: {level}") from None


class QRInput:
    """An ordered list of data segments with a version and correction level.

    A version of 0 means the smallest version that holds the data; it is
    raised automatically when the bit stream is built.
    """

    def __init__(self, version: int = 0, level: int = ECLevel.L) -> None:
        self._version = _checked_version(version)
        self._level = _checked_level(level)
        self.entries: list[Entry] = []
        self.fnc1: Mode | None = None
        self.appid = 0

    @property
    def version(self) -> int:
        return self._version

    @version.setter
    def version(self, value: int) -> None:
        self._version = _checked_version(value)

    @property
    def level(self) -> ECLevel:
        return self._level

    @level.setter
    def level(self, value: int) -> None:
        self._level = _checked_level(value)

    def set_version_and_level(self, version: int, level: int) -> None:
        """Set version and level together, validating both first."""
        checked_version = _checked_version(version)
        self._level = _checked_level(level)
        self._version = checked_version

    def append(self, mode: int, data: bytes | bytearray | str) -> Entry:
        """Append a segment of ``mode``; raise ValueError if ``data`` does not suit it."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        entry = Entry(Mode(mode), bytes(data))
        self.entries.append(entry)
        return entry

    def append_eci_header(self, ecinum: int) -> Entry:
        """Append an ECI designator for ``ecinum`` (0..999999)."""
        if not 0 <= ecinum <= MAX_ECI:
            raise ValueError(f"ECI number {ecinum} out of range 0..{MAX_ECI}")
        return self.append(Mode.ECI, ecinum.to_bytes(4, "little"))

    def insert_structured_append_header(self, size: int, number: int, parity: int) -> Entry:
        """Put a structured-append header in front of all segments.

        ``size`` is the number of symbols, ``number`` this symbol's index
        (1-based) and ``parity`` the parity shared by the whole set.
        """
        if size > MAX_STRUCTURED_SYMBOLS:
            raise ValueError(f"at most {MAX_STRUCTURED_SYMBOLS} structured symbols, got {size}")
        if number <= 0 or number > size:
            raise ValueError(f"symbol number {number} out of range 1..{size}")
        if not 0 <= parity <= 0xFF:
            raise ValueError(f"parity {parity} is not a byte")
        entry = Entry(Mode.STRUCTURE, bytes((size, number, parity)))
        self.entries.insert(0, entry)
        return entry

    def set_fnc1_first(self) -> None:
        """Mark the data as following the GS1 application identifiers."""
        self.fnc1 = Mode.FNC1FIRST

    def set_fnc1_second(self, appid: int) -> None:
        """Mark the data as following the industry application ``appid``."""
        if not 0 <= appid <= 0xFF:
            raise ValueError(f"application indicator {appid} is not a byte")
        self.fnc1 = Mode.FNC1SECOND
        self.appid = appid

    def copy(self) -> QRInput:
        """Return a copy holding the same version, level and segments.

        FNC1 settings are not carried over.
        """
        duplicate = QRInput(self._version, self._level)
        duplicate.entries = [Entry(entry.mode, entry.data) for entry in self.entries]
        return duplicate

    def parity(self) -> int:
        """Return the XOR of every data byte, structured-append headers excluded."""
        result = 0
        for entry in self.entries:
            if entry.mode != Mode.STRUCTURE:
                for byte in entry.data:
                    result ^= byte
        return result

    def estimate_bit_stream_size(self, version: int) -> int:
        """Estimate the encoded size of all segments at ``version`` in bits."""
        return _estimate_size(self.entries, version)

    def estimate_version(self) -> int:
        """Estimate the smallest version that holds the segments."""
        return _estimate_version(self.entries, self._level)

    def bit_stream(self) -> BitStream:
        """Encode all segments and pad them to the symbol's data capacity.

        The version is raised if it is too small for the data.
        """
        entries = self._merged_entries()
        estimated = _estimate_version(entries, self._level)
        if estimated > self._version:
            self._version = estimated

        bstream = BitStream()
        while True:
            bstream.clear()
            bits = sum(encode_entry(entry, bstream, self._version) for entry in entries)
            needed = qrspec.minimum_version((bits + 7) // 8, self._level)
            if needed > self._version:
                self._version = needed
            else:
                break

        self._append_padding(bstream)
        return bstream

    def byte_stream(self) -> bytes:
        """Return the padded data codewords."""
        return self.bit_stream().to_bytes()

    def _merged_entries(self) -> list[Entry]:
        entries = list(self.entries)
        if self.fnc1 is None:
            return entries
        if self.fnc1 == Mode.FNC1FIRST:
            raise ValueError("an FNC1 first-position header cannot be encoded")
        header = Entry(Mode.FNC1SECOND, bytes((self.appid,)))
        if entries and entries[0].mode in (Mode.STRUCTURE, Mode.ECI):
            entries.insert(1, header)
        else:
            entries.insert(0, header)
        return entries

    def _append_padding(self, bstream: BitStream) -> None:
        bits = len(bstream)
        maxwords = qrspec.data_length(self._version, self._level)
        maxbits = maxwords * 8
        if maxbits < bits:
            raise DataTooLargeError(
                f"{bits} bits do not fit in version {self._version} level {self._level.name}"
            )
        if maxbits == bits:
            return
        if maxbits - bits <= 4:
            bstream.append_num(maxbits - bits, 0)
            return
        words = (bits + 4 + 7) // 8
        bstream.append_num(words * 8 - bits, 0)
        for index in range(maxwords - words):
            bstream.append_num(8, _PAD_CODEWORDS[index & 1])


def _estimate_size(entries: list[Entry], version: int) -> int:
    return sum(estimate_entry_bits(entry, version) for entry in entries)


def _estimate_version(entries: list[Entry], level: ECLevel) -> int:
    version = 0
    while True:
        previous = version
        bits = _estimate_size(entries, previous)
        version = qrspec.minimum_version((bits + 7) // 8, level)
        if previous == 0 and version > 1:
            version -= 1
        if version <= previous:
            return version