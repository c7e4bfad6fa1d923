from __future__ import annotations

from dataclasses import asdict
from typing import Any, List, Optional, Tuple

from ..dsl.commands import BarcodeType
from .base import Device, DeviceError


class RecordingDevice(Device):
    """In-memory device keeping a log of every operation.

    ``fail_on`` names an operation that raises DeviceError; with
    ``fail_after`` the first n calls of that operation still succeed.
    """

    def __init__(self, fail_on: Optional[str] = None, fail_after: int = 0) -> None:
        super().__init__()
        self.operations: List[Tuple[Any, ...]] = []
        self.fail_on = fail_on
        self.fail_after = fail_after

    def _record(self, op: str, *args: Any) -> None:
        if op == self.fail_on:
            if self.fail_after <= 0:
                raise DeviceError(f"{op} failed")
            self.fail_after -= 1
        self.operations.append((op, *args))

    def initialize(self) -> None:
        super().initialize()
        self._record("initialize")

    def write_line(self, text: str) -> None:
        self._record("write_line", text, asdict(self.style))

    def line_feed(self) -> None:
        self._record("line_feed")

    def set_barcode_width(self, width: int) -> None:
        self._record("set_barcode_width", width)

    def set_barcode_height(self, height: int) -> None:
        self._record("set_barcode_height", height)

    def write_barcode(self, barcode_type: BarcodeType, payload: str) -> None:
        self._record("write_barcode", barcode_type.value, payload)

    def write_qrcode(self, payload: str, model2: bool, size: int, correction: int) -> None:
        self._record("write_qrcode", payload, model2, size, correction)

    def print(self) -> None:
        self._record("print")

    def print_and_cut(self) -> None:
        self._record("print_and_cut")

    def names(self) -> List[str]:
        return [op[0] for op in self.operations]
