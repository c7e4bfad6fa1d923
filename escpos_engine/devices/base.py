from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..dsl.commands import BarcodeType


class DeviceError(Exception):
    """A write or flush against an output device failed."""


@dataclass
class Style:
    bold: bool = False
    reverse: bool = False
    width: int = 1
    height: int = 1


class Device(ABC):
    """Stateful output sink a template is executed against.

    Style flags live in ``style`` and are read by the device when text is
    written; every operation may raise :class:`DeviceError`.
    """

    def __init__(self) -> None:
        self.style = Style()

    def initialize(self) -> None:
        """Reset the printer and the style state."""
        self.style = Style()

    @abstractmethod
    def write_line(self, text: str) -> None:
        """Write one line of text using the current style."""

    @abstractmethod
    def line_feed(self) -> None:
        """Advance one line."""

    @abstractmethod
    def set_barcode_width(self, width: int) -> None: ...

    @abstractmethod
    def set_barcode_height(self, height: int) -> None: ...

    @abstractmethod
    def write_barcode(self, barcode_type: BarcodeType, payload: str) -> None: ...

    @abstractmethod
    def write_qrcode(self, payload: str, model2: bool, size: int, correction: int) -> None: ...

    @abstractmethod
    def print(self) -> None:
        """Flush everything written so far to the paper."""

    @abstractmethod
    def print_and_cut(self) -> None:
        """Flush and cut the paper."""
