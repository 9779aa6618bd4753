# ookdecode/common/serial_link.py
from __future__ import annotations

import logging
from typing import Optional

import serial
from serial import SerialException
from serial.tools import list_ports

from ookdecode.core.errors import ReceiverIOError, ReceiverOpenError

_log = logging.getLogger(__name__)


def list_candidates():
    """Return a list of pyserial port info objects (for error messages/UI)."""
    return list(list_ports.comports())


def describe_candidates() -> str:
    ports = list_candidates()
    return "\n".join(
        f"- {p.device} {(p.description or '')}".strip() for p in ports
    ) or "(no serial ports found)"


class ReceiverLink:
    """
    Line-oriented link to an OOK receiver that prints one hex packet per line.

    readline() returns "" on timeout.
    """

    def __init__(self, port: str, baudrate: int = 115200, timeout: float = 1.0):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.ser: Optional[serial.Serial] = None

    def open(self) -> None:
        try:
            self.ser = serial.Serial(
                self.port,
                baudrate=self.baudrate,
                timeout=self.timeout,
            )
            self.ser.reset_input_buffer()
        except SerialException as e:
            self.ser = None
            raise ReceiverOpenError(
                f"Could not open receiver port {self.port}: {e}",
                hint="Available ports:\n" + describe_candidates(),
            ) from None
        _log.info("RECEIVER_OPEN port=%s baudrate=%d", self.port, self.baudrate)

    def close(self) -> None:
        if self.ser is not None:
            try:
                self.ser.close()
            finally:
                self.ser = None

    def is_open(self) -> bool:
        return self.ser is not None and self.ser.is_open

    def readline(self) -> str:
        if self.ser is None:
            raise ReceiverIOError("readline while receiver not open")

        try:
            raw = self.ser.readline()
        except SerialException as e:
            self.ser = None
            raise ReceiverIOError(f"Receiver read failed: {e}") from None
        return raw.decode("ascii", errors="replace").strip()

    def __enter__(self) -> "ReceiverLink":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
