"""
ESC/POS byte encoder.

Operations are buffered and written to a binary stream (an open device node
such as /dev/usb/lp0, a file, or BytesIO) on print / print_and_cut.
"""
from __future__ import annotations

import logging
from typing import BinaryIO, Dict, Tuple

from ..config.settings import PROFILES, PrinterProfile
from ..dsl.commands import BarcodeType
from .base import Device, DeviceError

logger = logging.getLogger(__name__)

ESC = b"\x1b"
GS = b"\x1d"
LF = b"\n"

# GS k function A: type byte, permitted payload lengths
BARCODES: Dict[BarcodeType, Tuple[int, Tuple[int, ...]]] = {
    BarcodeType.UPCA: (0, (11, 12)),
    BarcodeType.UPCE: (1, (6, 7, 8, 11, 12)),
    BarcodeType.EAN13: (2, (12, 13)),
    BarcodeType.EAN8: (3, (7, 8)),
}


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise DeviceError(f"{name} must be between {low} and {high}, got {value}")


def _qr(fn: int, payload: bytes) -> bytes:
    """GS ( k with cn=49 (QR code)."""
    body = bytes([49, fn]) + payload
    return GS + b"(k" + len(body).to_bytes(2, "little") + body


class EscposDevice(Device):
    def __init__(
        self,
        stream: BinaryIO,
        encoding: str = "cp437",
        profile: PrinterProfile = PROFILES["TMT20II"],
    ) -> None:
        super().__init__()
        self.stream = stream
        self.encoding = encoding
        self.profile = profile
        self.buffer = bytearray()

    def initialize(self) -> None:
        super().initialize()
        self.buffer += ESC + b"@"

    def _style_prefix(self) -> bytes:
        s = self.style
        _check_range("font width", s.width, 1, 8)
        _check_range("font height", s.height, 1, 8)
        size = ((s.width - 1) << 4) | (s.height - 1)
        return (
            ESC + b"E" + bytes([int(s.bold)])
            + GS + b"B" + bytes([int(s.reverse)])
            + GS + b"!" + bytes([size])
        )

    def write_line(self, text: str) -> None:
        try:
            data = text.encode(self.encoding)
        except (UnicodeEncodeError, LookupError) as exc:
            raise DeviceError(f"cannot encode {text!r} as {self.encoding}: {exc}") from exc
        self.buffer += self._style_prefix() + data

    def line_feed(self) -> None:
        self.buffer += LF

    def set_barcode_width(self, width: int) -> None:
        _check_range("barcode width", width, 2, 6)
        self.buffer += GS + b"w" + bytes([width])

    def set_barcode_height(self, height: int) -> None:
        _check_range("barcode height", height, 1, 255)
        self.buffer += GS + b"h" + bytes([height])

    def write_barcode(self, barcode_type: BarcodeType, payload: str) -> None:
        kind, lengths = BARCODES[BarcodeType(barcode_type)]
        if not payload.isdigit() or not payload.isascii() or len(payload) not in lengths:
            raise DeviceError(
                f"{barcode_type.value} payload must be {'/'.join(map(str, lengths))} digits, got {payload!r}"
            )
        self.buffer += GS + b"k" + bytes([kind]) + payload.encode("ascii") + b"\x00"

    def write_qrcode(self, payload: str, model2: bool, size: int, correction: int) -> None:
        if not self.profile.supports_qrcode:
            raise DeviceError(f"{self.profile.name} does not support QR codes")
        _check_range("QR code size", size, 1, 16)
        if 0 <= correction <= 3:
            correction += 48
        _check_range("QR code error correction", correction, 48, 51)
        try:
            data = payload.encode(self.encoding)
        except (UnicodeEncodeError, LookupError) as exc:
            raise DeviceError(f"cannot encode QR payload as {self.encoding}: {exc}") from exc
        self.buffer += (
            _qr(65, bytes([50 if model2 else 49, 0]))
            + _qr(67, bytes([size]))
            + _qr(69, bytes([correction]))
            + _qr(80, b"0" + data)
            + _qr(81, b"0")
        )

    def _flush(self) -> None:
        try:
            self.stream.write(bytes(self.buffer))
            self.stream.flush()
        except OSError as exc:
            raise DeviceError(f"write to printer failed: {exc}") from exc
        logger.debug("flushed %d byte(s)", len(self.buffer))
        self.buffer.clear()

    def print(self) -> None:
        self._flush()

    def print_and_cut(self) -> None:
        self.buffer += GS + b"VA" + bytes([3])
        self._flush()
