"""CRC-16 (reflected polynomial 0xA001, zero initial value) checksums."""

from __future__ import annotations

_POLYNOMIAL = 0xA001


def _build_table() -> tuple[int, ...]:
    table = []
    for index in range(256):
        value = index
        for _ in range(8):
            value = (value >> 1) ^ _POLYNOMIAL if value & 1 else value >> 1
        table.append(value)
    return tuple(table)


_TABLE = _build_table()


def crc16(data: bytes | bytearray | memoryview, length: int | None = None, crc: int = 0) -> int:
    """Return the CRC-16 of the first ``length`` bytes of ``data``.

    ``crc`` is the running value to continue from, so a checksum may be
    computed over several chunks.
    """
    view = bytes(data)
    if length is None:
        length = len(view)
    if length < 0 or length > len(view):
        raise ValueError(f"length {length} out of range for {len(view)} bytes")
    if not 0 <= crc <= 0xFFFF:
        raise ValueError(f"crc {crc} is not a 16-bit value")
    for byte in view[:length]:
        crc = ((crc >> 8) & 0xFF) ^ _TABLE[(crc ^ byte) & 0xFF]
    return crc