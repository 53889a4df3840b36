"""Splitting a string into QR Code segments of the cheapest modes."""

from __future__ import annotations

from .qrinput import QRInput
from .qrspec import Mode, length_indicator
from .segments import (
    estimate_bits_8,
    estimate_bits_an,
    estimate_bits_num,
    look_an_table,
)


def _byte_at(data: bytes, pos: int) -> int:
    return data[pos] if pos < len(data) else 0


def _isdigit(data: bytes, pos: int) -> bool:
    return 0x30 <= _byte_at(data, pos) <= 0x39


def _isalnum(data: bytes, pos: int) -> bool:
    return pos < len(data) and look_an_table(data[pos]) >= 0


def _identify(data: bytes, pos: int, hint: int) -> Mode:
    c = _byte_at(data, pos)
    if c == 0:
        return Mode.NUL
    if 0x30 <= c <= 0x39:
        return Mode.NUM
    if look_an_table(c) >= 0:
        return Mode.AN
    if hint == Mode.KANJI:
        d = _byte_at(data, pos + 1)
        if d != 0:
            word = (c << 8) | d
            if 0x8140 <= word <= 0x9FFC or 0xE040 <= word <= 0xEBBF:
                return Mode.KANJI
    return Mode.BYTE


def identify_mode(data: bytes | str, hint: int = Mode.BYTE) -> Mode:
    """Return the mode suggested by the first character(s) of ``data``.

    Kanji is only recognised when ``hint`` is ``Mode.KANJI``.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return _identify(bytes(data), 0, hint)


class _Splitter:
    def __init__(self, data: bytes, qrinput: QRInput, hint: int) -> None:
        self.data = data
        self.end = len(data)
        self.qrinput = qrinput
        self.hint = hint
        version = qrinput.version
        self.ln = length_indicator(Mode.NUM, version)
        self.la = length_indicator(Mode.AN, version)
        self.l8 = length_indicator(Mode.BYTE, version)

    def _mode(self, pos: int) -> Mode:
        return _identify(self.data, pos, self.hint)

    def _skip_digits(self, pos: int) -> int:
        while _isdigit(self.data, pos):
            pos += 1
        return pos

    def _skip_alnum(self, pos: int) -> int:
        while _isalnum(self.data, pos):
            pos += 1
        return pos

    def _append(self, mode: Mode, start: int, stop: int) -> int:
        self.qrinput.append(mode, self.data[start:stop])
        return stop - start

    def eat_num(self, start: int) -> int:
        p = self._skip_digits(start)
        run = p - start
        mode = self._mode(p)
        if mode == Mode.BYTE:
            dif = (estimate_bits_num(run) + 4 + self.ln
                   + estimate_bits_8(1) - estimate_bits_8(run + 1))
            if dif > 0:
                return self.eat_8(start)
        if mode == Mode.AN:
            dif = (estimate_bits_num(run) + 4 + self.ln
                   + estimate_bits_an(1) - estimate_bits_an(run + 1))
            if dif > 0:
                return self.eat_an(start)
        return self._append(Mode.NUM, start, p)

    def eat_an(self, start: int) -> int:
        p = start
        while _isalnum(self.data, p):
            if _isdigit(self.data, p):
                q = self._skip_digits(p)
                extra = 4 + self.ln if _isalnum(self.data, q) else 0
                dif = (estimate_bits_an(p - start)
                       + estimate_bits_num(q - p) + 4 + self.ln + extra
                       - estimate_bits_an(q - start))
                if dif < 0:
                    break
                p = q
            else:
                p += 1
        run = p - start
        if p < self.end and not _isalnum(self.data, p):
            dif = (estimate_bits_an(run) + 4 + self.la
                   + estimate_bits_8(1) - estimate_bits_8(run + 1))
            if dif > 0:
                return self.eat_8(start)
        return self._append(Mode.AN, start, p)

    def eat_kanji(self, start: int) -> int:
        p = start
        while self._mode(p) == Mode.KANJI:
            p += 2
        return self._append(Mode.KANJI, start, p)

    def eat_8(self, start: int) -> int:
        p = start + 1
        while p < self.end:
            mode = self._mode(p)
            if mode == Mode.KANJI:
                break
            if mode == Mode.NUM:
                q = self._skip_digits(p)
                swcost = 4 + self.l8 if self._mode(q) == Mode.BYTE else 0
                dif = (estimate_bits_8(p - start)
                       + estimate_bits_num(q - p) + 4 + self.ln + swcost
                       - estimate_bits_8(q - start))
                if dif < 0:
                    break
                p = q
            elif mode == Mode.AN:
                q = self._skip_alnum(p)
                swcost = 4 + self.l8 if self._mode(q) == Mode.BYTE else 0
                dif = (estimate_bits_8(p - start)
                       + estimate_bits_an(q - p) + 4 + self.la + swcost
                       - estimate_bits_8(q - start))
                if dif < 0:
                    break
                p = q
            else:
                p += 1
        return self._append(Mode.BYTE, start, p)

    def run(self) -> None:
        pos = 0
        while pos < self.end:
            mode = self._mode(pos)
            if mode == Mode.NUM:
                length = self.eat_num(pos)
            elif mode == Mode.AN:
                length = self.eat_an(pos)
            elif mode == Mode.KANJI and self.hint == Mode.KANJI:
                length = self.eat_kanji(pos)
            else:
                length = self.eat_8(pos)
            if length == 0:
                break
            pos += length


def _to_upper(data: bytes, hint: int) -> bytes:
    result = bytearray(data)
    pos = 0
    while pos < len(result):
        if _identify(result, pos, hint) == Mode.KANJI:
            pos += 2
        else:
            if 0x61 <= result[pos] <= 0x7A:
                result[pos] -= 32
            pos += 1
    return bytes(result)


def split_string(
    data: bytes | str,
    qrinput: QRInput,
    hint: int = Mode.BYTE,
    case_sensitive: bool = True,
) -> QRInput:
    """Split ``data`` into segments appended to ``qrinput`` and return it.

    Give ``Mode.KANJI`` as ``hint`` when ``data`` holds Shift-JIS kanji.
    Without ``case_sensitive``, lower-case letters are turned into upper
    case so they fit the alphanumeric mode. The data ends at the first NUL
    byte; empty data raises ValueError.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data).split(b"\0", 1)[0]
    if not data:
        raise ValueError("nothing to split")
    if not case_sensitive:
        data = _to_upper(data, hint)
    _Splitter(data, qrinput, hint).run()
    return qrinput