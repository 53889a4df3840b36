"""Reed-Solomon error correction codes over GF(256) for QR Code symbols."""

from __future__ import annotations

import functools

_SYMBOLS = 255
_PRIMITIVE = 0x11D  # x^8 + x^4 + x^3 + x^2 + 1
MIN_LENGTH = 2
MAX_LENGTH = 30


def _build_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    alpha = [0] * (_SYMBOLS + 1)
    aindex = [0] * (_SYMBOLS + 1)
    aindex[0] = _SYMBOLS
    b = 1
    for i in range(_SYMBOLS):
        alpha[i] = b
        aindex[b] = i
        b <<= 1
        if b & (_SYMBOLS + 1):
            b ^= _PRIMITIVE
        b &= _SYMBOLS
    return tuple(alpha), tuple(aindex)


_ALPHA, _AINDEX = _build_tables()


@functools.lru_cache(maxsize=None)
def _generator(length: int) -> tuple[int, ...]:
    """Return the generator polynomial of ``length`` roots, as exponents."""
    g = [0] * (length + 1)
    g[0] = 1
    for i in range(length):
        g[i + 1] = 1
        for j in range(i, 0, -1):
            g[j] = g[j - 1] ^ _ALPHA[(_AINDEX[g[j]] + i) % _SYMBOLS]
        g[0] = _ALPHA[(_AINDEX[g[0]] + i) % _SYMBOLS]
    return tuple(_AINDEX[value] for value in g)


def rs_encode(data: bytes | bytearray, ecc_length: int) -> bytes:
    """Return ``ecc_length`` error correction codewords for ``data``."""
    if not MIN_LENGTH <= ecc_length <= MAX_LENGTH:
        raise ValueError(f"ECC length {ecc_length} out of range {MIN_LENGTH}..{MAX_LENGTH}")
    gen = _generator(ecc_length)
    ecc = [0] * ecc_length
    for byte in bytes(data):
        feedback = _AINDEX[byte ^ ecc[0]]
        if feedback != _SYMBOLS:
            for j in range(1, ecc_length):
                ecc[j] ^= _ALPHA[(feedback + gen[ecc_length - j]) % _SYMBOLS]
            last = _ALPHA[(feedback + gen[0]) % _SYMBOLS]
        else:
            last = 0
        ecc = ecc[1:] + [last]
    return bytes(ecc)