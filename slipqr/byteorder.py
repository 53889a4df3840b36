"""Byte-order swapping for fixed-width integers."""

from __future__ import annotations


def _swap(value: int, size: int, signed: bool) -> int:
    try:
        raw = value.to_bytes(size, "big", signed=signed)
    except OverflowError as exc:
        kind = "signed" if signed else "unsigned"
        raise ValueError(f"{value} does not fit in {size * 8}-bit {kind} integer") from exc
    return int.from_bytes(raw, "little", signed=signed)


def swap_int16(value: int) -> int:
    """Reverse the two bytes of a signed 16-bit integer."""
    return _swap(value, 2, True)


def swap_uint16(value: int) -> int:
    """Reverse the two bytes of an unsigned 16-bit integer."""
    return _swap(value, 2, False)


def swap_uint32(value: int) -> int:
    """Reverse the four bytes of an unsigned 32-bit integer."""
    return _swap(value, 4, False)