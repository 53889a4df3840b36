"""Serial port access and the controller that routes data to protocols."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

import serial
from serial.tools import list_ports

from .protocols import ProtocolManager, default_manager

log = logging.getLogger(__name__)

_DATA_BITS = {
    5: serial.FIVEBITS,
    6: serial.SIXBITS,
    7: serial.SEVENBITS,
    8: serial.EIGHTBITS,
}
_STOP_BITS = {
    1: serial.STOPBITS_ONE,
    2: serial.STOPBITS_TWO,
    3: serial.STOPBITS_ONE_POINT_FIVE,
}
_PARITY = {
    0: serial.PARITY_NONE,
    2: serial.PARITY_EVEN,
    3: serial.PARITY_ODD,
    4: serial.PARITY_SPACE,
    5: serial.PARITY_MARK,
}


def _lookup(table: dict[int, object], value: int, what: str) -> object:
    try:
        return table[value]
    except KeyError:
        raise ValueError(f"unsupported {what}: {value}") from None


class SerialWorker:
    """Owns one serial port: opens, closes, writes and reads it."""

    def __init__(
        self,
        on_raw: Callable[[bytes], object] | None = None,
        on_opened: Callable[[bool], object] | None = None,
    ) -> None:
        self.on_raw = on_raw
        self.on_opened = on_opened
        self._port: serial.SerialBase | None = None

    @property
    def is_open(self) -> bool:
        return self._port is not None and self._port.is_open

    def open(self, port: str, baud_rate: int, data_bits: int, stop_bits: int, parity: int) -> bool:
        """Open ``port`` with the given settings and report whether it worked.

        Stop bits and parity use the codes 1/2/3 (one, two, one and a half)
        and 0/2/3/4/5 (none, even, odd, space, mark).
        """
        if baud_rate <= 0:
            raise ValueError(f"unsupported baud rate: {baud_rate}")
        bytesize = _lookup(_DATA_BITS, data_bits, "data bits")
        stopbits = _lookup(_STOP_BITS, stop_bits, "stop bits")
        parity_code = _lookup(_PARITY, parity, "parity")

        self.close()
        connection = serial.serial_for_url(port, do_not_open=True)
        connection.baudrate = baud_rate
        connection.bytesize = bytesize
        connection.stopbits = stopbits
        connection.parity = parity_code
        connection.xonxoff = False
        connection.rtscts = False
        connection.timeout = 0
        try:
            connection.open()
        except (serial.SerialException, OSError) as exc:
            log.warning("Cannot open %s: %s", port, exc)
            ok = False
        else:
            ok = True
        self._port = connection if ok else None
        if self.on_opened is not None:
            self.on_opened(ok)
        return ok

    def close(self) -> None:
        """Close the port if one is held."""
        if self._port is not None:
            if self._port.is_open:
                self._port.close()
            self._port = None

    def send(self, text: str) -> int:
        """Write ``text`` as UTF-8; return the number of bytes written."""
        if not self.is_open:
            return 0
        return self._port.write(text.encode("utf-8")) or 0

    def read_available(self) -> bytes:
        """Read whatever is waiting, pass it to ``on_raw`` and return it."""
        if not self.is_open:
            return b""
        waiting = self._port.in_waiting
        if not waiting:
            return b""
        data = bytes(self._port.read(waiting))
        if data and self.on_raw is not None:
            self.on_raw(data)
        return data


class SerialController:
    """Drives a worker in the background and hands received data to protocols."""

    PORT_SCAN_INTERVAL = 1.0
    READ_INTERVAL = 0.02

    def __init__(self, manager: ProtocolManager | None = None, worker: SerialWorker | None = None) -> None:
        self.manager = manager if manager is not None else default_manager()
        self.worker = worker if worker is not None else SerialWorker()
        self.worker.on_raw = self.received_raw
        self.worker.on_opened = self._port_opened

        self.on_open_changed: Callable[[bool], object] | None = None
        self.on_ports_changed: Callable[[list[str]], object] | None = None
        self.on_frames: Callable[[list[bytes]], object] | None = None

        self._is_open = False
        self._ports: list[str] = []
        self._lock = threading.RLock()
        self._stop = threading.Event()

        self.refresh_ports()
        self._thread = threading.Thread(target=self._run, name="serial-controller", daemon=True)
        self._thread.start()

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def available_ports(self) -> list[str]:
        return list(self._ports)

    def connect_port(self, port: str, baud_rate: int, data_bits: int, stop_bits: int, parity: int) -> bool:
        """Open ``port``; return whether it succeeded."""
        with self._lock:
            return self.worker.open(port, baud_rate, data_bits, stop_bits, parity)

    def disconnect_port(self) -> None:
        """Close the port."""
        with self._lock:
            self.worker.close()
        self._set_open(False)

    def send(self, text: str) -> int:
        """Send ``text`` through the open port."""
        with self._lock:
            return self.worker.send(text)

    def refresh_ports(self) -> bool:
        """Rescan serial ports; return True if the list changed."""
        current = [info.name for info in list_ports.comports()]
        if current == self._ports:
            return False
        self._ports = current
        if self.on_ports_changed is not None:
            self.on_ports_changed(list(current))
        return True

    def received_raw(self, data: bytes) -> list[bytes]:
        """Decode raw bytes with the current protocol; return the frames."""
        if self.manager.current is None:
            return []
        frames = self.manager.handle_received(data)
        if frames and self.on_frames is not None:
            self.on_frames(frames)
        return frames

    def close(self) -> None:
        """Stop background work and release the port."""
        self._stop.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)
        with self._lock:
            self.worker.close()
        self._is_open = False

    def __enter__(self) -> SerialController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _port_opened(self, ok: bool) -> None:
        self._set_open(ok)

    def _set_open(self, value: bool) -> None:
        self._is_open = value
        if self.on_open_changed is not None:
            self.on_open_changed(value)

    def _run(self) -> None:
        next_scan = time.monotonic() + self.PORT_SCAN_INTERVAL
        while not self._stop.wait(self.READ_INTERVAL):
            with self._lock:
                try:
                    self.worker.read_available()
                except (serial.SerialException, OSError) as exc:
                    log.warning("Serial read failed: %s", exc)
                    self.worker.close()
                    self._set_open(False)
            if time.monotonic() >= next_scan:
                try:
                    self.refresh_ports()
                except OSError as exc:
                    log.warning("Port scan failed: %s", exc)
                next_scan = time.monotonic() + self.PORT_SCAN_INTERVAL