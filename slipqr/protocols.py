"""Registry of frame protocols and routing of received data."""

from __future__ import annotations

import functools
import logging

from .slip import Protocol, SlipProtocol

log = logging.getLogger(__name__)


class ProtocolManager:
    """Holds protocols by name and decodes data with the current one."""

    def __init__(self) -> None:
        self._protocols: dict[str, Protocol] = {}
        slip = SlipProtocol()
        self.register(slip)
        self._current: Protocol | None = slip

    @property
    def current(self) -> Protocol | None:
        return self._current

    @property
    def names(self) -> list[str]:
        return list(self._protocols)

    def register(self, protocol: Protocol) -> bool:
        """Add ``protocol``; return False if its name is already taken."""
        if protocol.name in self._protocols:
            log.warning("Protocol already registered: %s", protocol.name)
            return False
        self._protocols[protocol.name] = protocol
        return True

    def unregister(self, name: str) -> None:
        """Remove the protocol called ``name``, if present."""
        self._protocols.pop(name, None)

    def set_current(self, name: str) -> None:
        """Select the protocol called ``name``; unknown names select none."""
        self._current = self._protocols.get(name)

    def handle_received(self, data: bytes) -> list[bytes]:
        """Decode ``data`` with the current protocol and return its frames."""
        if self._current is None:
            return []
        frames = self._current.decode_frame(data, bytearray())
        log.debug("recvData: %s", bytes(data).hex(" ").upper())
        return frames


@functools.lru_cache(maxsize=None)
def default_manager() -> ProtocolManager:
    """Return the process-wide protocol manager."""
    return ProtocolManager()