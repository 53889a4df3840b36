"""Structured append: spreading one input over a set of linked symbols."""

from __future__ import annotations

from collections.abc import Iterator

from . import qrspec
from .qrinput import DataTooLargeError, QRInput
from .segments import (
    MAX_STRUCTURED_SYMBOLS,
    STRUCTURE_HEADER_SIZE,
    BitStream,
    Entry,
    encode_entry,
    estimate_entry_bits,
    length_of_code,
)


class QRInputStruct:
    """An ordered set of inputs that form one structured-append sequence."""

    def __init__(self) -> None:
        self.inputs: list[QRInput] = []
        self._parity: int | None = None

    def __len__(self) -> int:
        return len(self.inputs)

    def __iter__(self) -> Iterator[QRInput]:
        return iter(self.inputs)

    @property
    def size(self) -> int:
        """Number of symbols in the set."""
        return len(self.inputs)

    @property
    def parity(self) -> int | None:
        """Parity shared by the set, or None while it is still to be computed."""
        return self._parity

    @parity.setter
    def parity(self, value: int | None) -> None:
        if value is not None and not 0 <= value <= 0xFF:
            raise ValueError(f"parity {value} is not a byte")
        self._parity = value

    def append_input(self, qrinput: QRInput) -> int:
        """Add ``qrinput`` to the end of the set; return the new size."""
        self.inputs.append(qrinput)
        return len(self.inputs)

    def insert_structured_append_headers(self) -> None:
        """Put a structured-append header in front of every input of the set.

        A set of one symbol needs no header and is left unchanged.
        """
        if len(self.inputs) == 1:
            return
        if self._parity is None:
            self._parity = self._calc_parity()
        total = len(self.inputs)
        for number, qrinput in enumerate(self.inputs, start=1):
            qrinput.insert_structured_append_header(total, number, self._parity)

    def _calc_parity(self) -> int:
        result = 0
        for qrinput in self.inputs:
            result ^= qrinput.parity()
        return result


def split_entry(qrinput: QRInput, index: int, nbytes: int) -> None:
    """Split the segment at ``index`` so its first ``nbytes`` bytes stay in place.

    The rest becomes a new segment right after it. Raises ValueError if
    either half would be empty or invalid for the segment's mode.
    """
    entry = qrinput.entries[index]
    head = Entry(entry.mode, entry.data[:nbytes])
    tail = Entry(entry.mode, entry.data[nbytes:])
    qrinput.entries[index:index + 1] = [head, tail]


def split_input_to_struct(qrinput: QRInput) -> QRInputStruct:
    """Spread the segments of ``qrinput`` over symbols of its version and level.

    The input itself is left untouched. Raises ValueError if the version is
    not fixed or too small for any data, and DataTooLargeError if more than
    the allowed number of symbols would be needed.
    """
    result = QRInputStruct()
    current = qrinput.copy()
    result.parity = current.parity()

    version = current.version
    level = current.level
    maxbits = qrspec.data_length(version, level) * 8 - STRUCTURE_HEADER_SIZE
    if maxbits <= 0:
        raise ValueError(f"version {version} level {level.name} leaves no room for data")

    bits = 0
    index = 0
    while index < len(current.entries):
        entry = current.entries[index]
        nextbits = estimate_entry_bits(entry, version)
        if bits + nextbits <= maxbits:
            bits += encode_entry(entry, BitStream(), version)
            index += 1
            continue

        nbytes = length_of_code(entry.mode, version, maxbits - bits)
        following = QRInput(version, level)
        if nbytes > 0:
            split_entry(current, index, nbytes)
            following.entries = current.entries[index + 1:]
            del current.entries[index + 1:]
        else:
            if index == 0:
                raise ValueError(f"segment of mode {entry.mode.name} cannot be split to fit")
            following.entries = current.entries[index:]
            del current.entries[index:]
        result.append_input(current)
        current = following
        bits = 0
        index = 0

    result.append_input(current)
    if result.size > MAX_STRUCTURED_SYMBOLS:
        raise DataTooLargeError(
            f"{result.size} symbols needed, at most {MAX_STRUCTURED_SYMBOLS} allowed"
        )
    result.insert_structured_append_headers()
    return result