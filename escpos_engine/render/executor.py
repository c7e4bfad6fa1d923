"""
Apply a parsed template to an output device.

Style commands change ``device.style`` and stay in effect for every
following part. Output is flushed once at the end, and additionally at each
CUT. The first DeviceError stops execution and is re-raised unchanged.
"""
import logging
from typing import Any, Dict, Iterable, List

from ..devices.base import Device, DeviceError
from ..dsl.commands import Command, TemplatePart
from ..dsl.errors import TemplateValidationError

logger = logging.getLogger(__name__)


def _write_text(device: Device, content: str) -> None:
    for line in content.split("\n"):
        device.write_line(line)
        device.line_feed()


def apply_part(device: Device, part: TemplatePart) -> None:
    cmd, args = part.command, part.arguments
    if cmd == Command.TEXT:
        _write_text(device, part.content)
    elif cmd == Command.BOLD:
        device.style.bold = not device.style.bold
    elif cmd == Command.REVERSE:
        device.style.reverse = not device.style.reverse
    elif cmd == Command.FONTSIZE:
        if args:
            device.style.width, device.style.height = args[0], args[1]
    elif cmd == Command.BARCODE:
        if len(args) == 3:
            device.set_barcode_width(args[1])
            device.set_barcode_height(args[2])
        device.write_barcode(args[0], part.content)
    elif cmd == Command.QRCODE:
        model, size, correction = args
        device.write_qrcode(part.content, model == 2, size, correction)
    elif cmd == Command.CUT:
        device.print_and_cut()
    else:
        raise TemplateValidationError(str(cmd), f"unknown command: {cmd!r}")


def execute_template(
    template: Iterable[TemplatePart],
    device: Device,
    *,
    line_feeds_after: int = 0,
    cut: bool = False,
) -> None:
    """Run every part in order, then flush (or flush and cut) once."""
    try:
        for index, part in enumerate(template):
            logger.debug("part %d: %r %r", index, part.command, part.arguments)
            apply_part(device, part)
        for _ in range(line_feeds_after):
            device.line_feed()
        if cut:
            device.print_and_cut()
        else:
            device.print()
    except DeviceError as exc:
        logger.error("device failure: %s", exc)
        raise


def template_to_json(template: Iterable[TemplatePart]) -> List[Dict[str, Any]]:
    """Plain JSON-able view of a template."""
    return [
        {
            "command": part.command.label,
            "arguments": [getattr(a, "value", a) for a in part.arguments],
            "content": part.content,
        }
        for part in template
    ]
