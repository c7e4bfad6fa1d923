import json
from pathlib import Path
from typing import Optional

import typer

from ..config.settings import ConfigError, load_settings
from ..devices.base import DeviceError
from ..dsl.errors import TemplateError
from ..dsl.template_parser import parse_template
from ..render.executor import template_to_json
from ..render.job import run_job
from .log import setup_logging

app = typer.Typer(help="ESC/POS template CLI")


# ---------------------------
# Helpers
# ---------------------------

def _read_template(path: Path) -> str:
    # a single trailing newline is file formatting, not a blank receipt line
    return path.read_text(encoding="utf-8").removesuffix("\n")


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"error: {exc}", err=True)
    return typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    setup_logging(verbose)


# ---------------------------
# Commands
# ---------------------------

@app.command()
def parse(
    template: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template text file"),
    out: Optional[Path] = typer.Option(None, help="Write JSON here instead of stdout"),
):
    """Parse a template and dump its instruction list as JSON."""
    try:
        parts = parse_template(_read_template(template))
    except TemplateError as exc:
        raise _fail(exc)
    payload = json.dumps(template_to_json(parts), indent=2)
    if out is None:
        typer.echo(payload)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(payload)
    typer.echo(f"Wrote {len(parts)} instruction(s) to {out}")


@app.command()
def check(
    template: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template text file"),
):
    """Validate a template without printing it."""
    try:
        parts = parse_template(_read_template(template))
    except TemplateError as exc:
        raise _fail(exc)
    typer.echo(f"OK: {len(parts)} instruction(s)")


@app.command()
def preview(
    template: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template text file"),
    out: Path = typer.Option(..., help="Output SVG path"),
    options: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Options YAML"),
):
    """Render a template to an SVG receipt preview."""
    from ..devices.svg_preview import SvgPreviewDevice  # svgwrite only needed here

    try:
        settings = load_settings(options)
        out.parent.mkdir(parents=True, exist_ok=True)
        device = SvgPreviewDevice(str(out), width_px=settings.printer.dots_per_line)
        run_job(_read_template(template), device, settings)
    except (TemplateError, DeviceError, ConfigError) as exc:
        raise _fail(exc)
    typer.echo(f"Wrote {out}")


@app.command("print")
def print_cmd(
    template: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template text file"),
    target: Path = typer.Option(Path("/dev/usb/lp0"), help="Printer device node or output file"),
    options: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Options YAML"),
    dry_run: bool = typer.Option(False, help="Echo device operations instead of printing"),
):
    """Print a template on an ESC/POS printer."""
    try:
        settings = load_settings(options)
        text = _read_template(template)
        if dry_run:
            from ..devices.recording import RecordingDevice

            device = RecordingDevice()
            run_job(text, device, settings)
            for op in device.operations:
                typer.echo(" ".join(repr(v) if i else v for i, v in enumerate(op)))
            return

        from ..devices.escpos_stream import EscposDevice

        # parse before opening the printer so bad input never reaches it
        parse_template(text)
        try:
            stream = open(target, "wb")
        except OSError as exc:
            raise DeviceError(f"cannot open {target}: {exc}") from exc
        with stream:
            device = EscposDevice(stream, encoding=settings.encoding, profile=settings.printer)
            run_job(text, device, settings)
    except (TemplateError, DeviceError, ConfigError) as exc:
        raise _fail(exc)
    typer.echo(f"Printed {template} to {target}")


if __name__ == "__main__":
    app()
