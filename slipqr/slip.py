"""Frame decoding protocols: the common interface and a SLIP decoder."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .crc16 import crc16

END = 0xC0
ESC = 0xDB
ESC_END = 0xDC
ESC_ESC = 0xDD

MIN_PACKET_LENGTH = 5

_UNESCAPE = {ESC_ESC: ESC, ESC_END: END}


class Protocol(ABC):
    """A protocol that turns a raw byte stream into verified frames."""

    name: str = ""

    @abstractmethod
    def verify_msg(self, msg: bytearray) -> bool:
        """Check a complete message, stripping any trailer when it is valid."""

    @abstractmethod
    def decode_frame(self, data: bytes, buffer: bytearray | None = None) -> list[bytes]:
        """Feed raw bytes into ``buffer`` and return the frames completed."""


class SlipProtocol(Protocol):
    """SLIP framing with a little-endian CRC-16 trailer on every packet."""

    name = "slip"

    def __init__(self) -> None:
        self.got_message = False
        self._escaped = False

    def verify_msg(self, msg: bytearray) -> bool:
        """Validate the CRC trailer of ``msg``; on success remove the trailer."""
        if len(msg) < MIN_PACKET_LENGTH:
            return False
        expected = crc16(msg, len(msg) - 2)
        received = msg[-2] | (msg[-1] << 8)
        if expected != received:
            return False
        del msg[-2:]
        return True

    def decode_frame(self, data: bytes, buffer: bytearray | None = None) -> list[bytes]:
        """Unescape ``data`` into ``buffer``; return payloads verified at each END.

        A verified payload stays in ``buffer``; an invalid one clears it.
        """
        if buffer is None:
            buffer = bytearray()
        frames: list[bytes] = []
        for byte in bytes(data):
            if byte == END:
                if self.verify_msg(buffer):
                    self.got_message = True
                    frames.append(bytes(buffer))
                else:
                    buffer.clear()
            elif byte == ESC:
                self._escaped = True
            else:
                if self._escaped:
                    decoded = _UNESCAPE.get(byte)
                    if decoded is not None:
                        buffer.append(decoded)
                else:
                    buffer.append(byte)
                self._escaped = False
        return frames