"""
Directive vocabulary and per-command argument rules.

    [](BOLD)                       toggle bold
    [](REVERSE)                    toggle reverse video
    [](FONTSIZE[,w[,h]])           font size, one value is used for both
    [payload](BARCODE,type[,w[,h]]) barcode, type is UPCA|UPCE|EAN13|EAN8
    [payload](QRCODE,model,size,ec) QR code
    [](CUT)                        print and cut
    plain text                     implicit TEXT command
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from .errors import TemplateValidationError


class Command(str, Enum):
    TEXT = ""
    BOLD = "BOLD"
    REVERSE = "REVERSE"
    FONTSIZE = "FONTSIZE"
    BARCODE = "BARCODE"
    QRCODE = "QRCODE"
    CUT = "CUT"

    @property
    def label(self) -> str:
        return self.value or "TEXT"

    @classmethod
    def lookup(cls, name: str) -> "Command":
        try:
            return cls(name)
        except ValueError:
            raise TemplateValidationError(name, f"unknown command: {name!r}") from None


class BarcodeType(str, Enum):
    UPCA = "UPCA"
    UPCE = "UPCE"
    EAN13 = "EAN13"
    EAN8 = "EAN8"


@dataclass
class TemplatePart:
    command: Command = Command.TEXT
    arguments: List[Any] = field(default_factory=list)
    content: str = ""


# text presence per command
NO_TEXT = (Command.BOLD, Command.REVERSE, Command.FONTSIZE, Command.CUT)
NEEDS_TEXT = (Command.TEXT, Command.BARCODE, Command.QRCODE)


INTEGER = re.compile(r"[+-]?[0-9]+")


def _to_int(command: Command, arg: str) -> int:
    if not INTEGER.fullmatch(arg):
        raise TemplateValidationError(
            command.value, f"{command.label}: argument {arg!r} is not an integer"
        )
    return int(arg)


def _barcode_type(arg: str) -> BarcodeType:
    tag = arg.upper()
    try:
        return BarcodeType(tag)
    except ValueError:
        raise TemplateValidationError(Command.BARCODE.value, f"unknown barcode type: {tag}") from None


def _count_error(command: Command) -> TemplateValidationError:
    return TemplateValidationError(command.value, f"invalid argument count for {command.label}")


def validate(command: Command, args: List[str], text: str) -> List[Any]:
    """Check text presence and convert raw args into typed arguments."""
    if command in NO_TEXT:
        if text:
            raise TemplateValidationError(command.value, f"{command.label} does not allow text")
    elif command in NEEDS_TEXT:
        if not text:
            raise TemplateValidationError(command.value, f"{command.label} requires text")
    else:
        raise TemplateValidationError(str(command), f"unknown command: {command!r}")

    if command in (Command.BOLD, Command.REVERSE, Command.TEXT, Command.CUT):
        if args:
            raise TemplateValidationError(command.value, f"{command.label} does not allow arguments")
        return []

    if command == Command.FONTSIZE:
        if len(args) > 2:
            raise _count_error(command)
        sizes = [_to_int(command, a) for a in args]
        if len(sizes) == 1:
            sizes.append(sizes[0])
        return sizes

    if command == Command.BARCODE:
        if not args or len(args) > 3:
            raise _count_error(command)
        out: List[Any] = [_barcode_type(args[0])]
        out.extend(_to_int(command, a) for a in args[1:])
        if len(out) == 2:
            out.append(out[1])
        return out

    # QRCODE
    if len(args) != 3:
        raise TemplateValidationError(command.value, f"{command.label} requires three arguments")
    return [_to_int(command, a) for a in args]
