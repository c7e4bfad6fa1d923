import pytest

from escpos_engine.devices.base import DeviceError
from escpos_engine.devices.recording import RecordingDevice
from escpos_engine.dsl.commands import BarcodeType, Command, TemplatePart
from escpos_engine.dsl.errors import TemplateValidationError
from escpos_engine.dsl.template_parser import parse_template
from escpos_engine.render.executor import execute_template, template_to_json


def run(text, **kwargs):
    device = RecordingDevice()
    execute_template(parse_template(text), device, **kwargs)
    return device


def test_text_is_written_line_by_line():
    device = run("one\ntwo")
    assert device.names() == ["write_line", "line_feed", "write_line", "line_feed", "print"]
    assert [op[1] for op in device.operations if op[0] == "write_line"] == ["one", "two"]


def test_trailing_newline_gives_empty_last_line():
    device = run("one\n")
    assert device.names() == ["write_line", "line_feed", "write_line", "line_feed", "print"]
    assert device.operations[2][1] == ""


def test_bold_applies_to_following_text():
    device = run("[](BOLD)Bold[](BOLD)plain")
    lines = [op for op in device.operations if op[0] == "write_line"]
    assert lines[0][1] == "Bold" and lines[0][2]["bold"] is True
    assert lines[1][1] == "plain" and lines[1][2]["bold"] is False


def test_double_toggle_restores_flags():
    device = RecordingDevice()
    device.style.bold = True
    execute_template(parse_template("[](BOLD)[](REVERSE)x[](REVERSE)[](BOLD)"), device)
    assert device.style.bold is True
    assert device.style.reverse is False


def test_fontsize_overwrites():
    device = run("[](FONTSIZE,3,2)")
    assert (device.style.width, device.style.height) == (3, 2)
    device = run("[](FONTSIZE,3,2)[](FONTSIZE,1)")
    assert (device.style.width, device.style.height) == (1, 1)


def test_fontsize_without_arguments_keeps_state():
    device = RecordingDevice()
    device.style.width = device.style.height = 4
    execute_template(parse_template("[](FONTSIZE)x"), device)
    assert (device.style.width, device.style.height) == (4, 4)


def test_barcode():
    device = run("[036000291452](BARCODE,upca,2,80)")
    assert device.operations == [
        ("set_barcode_width", 2),
        ("set_barcode_height", 80),
        ("write_barcode", "UPCA", "036000291452"),
        ("print",),
    ]


def test_barcode_type_only_keeps_size():
    device = run("[1234567](BARCODE,EAN8)")
    assert device.names() == ["write_barcode", "print"]


@pytest.mark.parametrize("model, model2", [(2, True), (1, False), (0, False), (7, False)])
def test_qrcode_model_flag(model, model2):
    device = run(f"[hello](QRCODE,{model},4,1)")
    assert device.operations[0] == ("write_qrcode", "hello", model2, 4, 1)


def test_cut_flushes_and_output_continues():
    device = run("a[](CUT)b")
    assert device.names() == [
        "write_line", "line_feed", "print_and_cut", "write_line", "line_feed", "print",
    ]


def test_final_flush_options():
    device = run("a", line_feeds_after=2, cut=True)
    assert device.names() == ["write_line", "line_feed", "line_feed", "line_feed", "print_and_cut"]


def test_empty_template_still_flushes():
    assert run("").names() == ["print"]


def test_device_failure_stops_execution():
    device = RecordingDevice(fail_on="write_barcode")
    template = parse_template("a[1234567](BARCODE,EAN8)b")
    with pytest.raises(DeviceError, match="write_barcode failed"):
        execute_template(template, device)
    assert device.names() == ["write_line", "line_feed"]


def test_device_failure_midway_through_text():
    device = RecordingDevice(fail_on="write_line", fail_after=1)
    with pytest.raises(DeviceError):
        execute_template(parse_template("one\ntwo\nthree"), device)
    assert device.names() == ["write_line", "line_feed"]


def test_final_flush_failure_propagates():
    with pytest.raises(DeviceError):
        execute_template(parse_template("x"), RecordingDevice(fail_on="print"))


def test_unknown_command_at_execution():
    with pytest.raises(TemplateValidationError, match="unknown command"):
        execute_template([TemplatePart("ITALIC", [], "x")], RecordingDevice())


def test_template_to_json():
    template = [
        TemplatePart(Command.BOLD),
        TemplatePart(Command.BARCODE, [BarcodeType.UPCA, 2, 2], "CONTENT"),
        TemplatePart(content="Text"),
    ]
    assert template_to_json(template) == [
        {"command": "BOLD", "arguments": [], "content": ""},
        {"command": "BARCODE", "arguments": ["UPCA", 2, 2], "content": "CONTENT"},
        {"command": "TEXT", "arguments": [], "content": "Text"},
    ]
