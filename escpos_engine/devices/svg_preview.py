from __future__ import annotations

import svgwrite

from ..dsl.commands import BarcodeType
from .base import Device, DeviceError

BASE_FONT = 16
MARGIN = 10


class SvgPreviewDevice(Device):
    """Draws the receipt into an SVG file instead of paper."""

    def __init__(self, filename: str, width_px: int = 576) -> None:
        super().__init__()
        self.filename = filename
        self.width_px = width_px
        self.dwg = svgwrite.Drawing(filename, size=(width_px, MARGIN))
        self.dwg.add(self.dwg.rect(insert=(0, 0), size=("100%", "100%"), fill="white"))
        self.y = MARGIN
        self.x = MARGIN
        self.line_height = BASE_FONT
        self.barcode_width = 3
        self.barcode_height = 162

    def write_line(self, text: str) -> None:
        width, height = max(self.style.width, 1), max(self.style.height, 1)
        font_size = BASE_FONT * height
        advance = len(text) * font_size * 0.6 * width / height
        fill = "black"
        if self.style.reverse:
            self.dwg.add(self.dwg.rect(insert=(self.x, self.y), size=(advance, font_size * 1.2), fill="black"))
            fill = "white"
        self.dwg.add(
            self.dwg.text(
                text,
                insert=(self.x, self.y + font_size),
                font_size=f"{font_size}px",
                font_family="monospace",
                font_weight="bold" if self.style.bold else "normal",
                fill=fill,
            )
        )
        self.x += advance
        self.line_height = max(self.line_height, font_size * 1.2)

    def line_feed(self) -> None:
        self.y += self.line_height
        self.x = MARGIN
        self.line_height = BASE_FONT * 1.2

    def set_barcode_width(self, width: int) -> None:
        self.barcode_width = width

    def set_barcode_height(self, height: int) -> None:
        self.barcode_height = height

    def _block(self, w: float, h: float, label: str) -> None:
        g = self.dwg.g(transform=f"translate({MARGIN},{self.y})")
        g.add(self.dwg.rect(insert=(0, 0), size=(w, h), fill="none", stroke="black", stroke_width=1))
        g.add(self.dwg.text(label, insert=(4, h + 14), font_size="12px", font_family="monospace"))
        self.dwg.add(g)
        self.y += h + 20
        self.x = MARGIN

    def write_barcode(self, barcode_type: BarcodeType, payload: str) -> None:
        self._block(len(payload) * 7 * self.barcode_width, self.barcode_height,
                    f"{barcode_type.value} {payload}")

    def write_qrcode(self, payload: str, model2: bool, size: int, correction: int) -> None:
        side = 25 * size
        self._block(side, side, f"QR{' (model 2)' if model2 else ''} {payload}")

    def _save(self) -> None:
        self.dwg["height"] = self.y + MARGIN
        try:
            self.dwg.save()
        except OSError as exc:
            raise DeviceError(f"cannot write preview {self.filename}: {exc}") from exc

    def print(self) -> None:
        self._save()

    def print_and_cut(self) -> None:
        self.y += MARGIN
        cut = self.dwg.line(start=(0, self.y), end=(self.width_px, self.y), stroke="gray")
        cut.dasharray([6, 4])
        self.dwg.add(cut)
        self.y += MARGIN
        self._save()
