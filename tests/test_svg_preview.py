from escpos_engine.config.settings import JobSettings
from escpos_engine.devices.svg_preview import SvgPreviewDevice
from escpos_engine.render.job import run_job


def test_preview_written(tmp_path):
    out = tmp_path / "receipt.svg"
    device = SvgPreviewDevice(str(out), width_px=384)
    run_job(
        "[](BOLD)Title[](BOLD)\n[](REVERSE)Total[](REVERSE)[123456789012](BARCODE,EAN13,2)"
        "[hi](QRCODE,2,3,0)[](CUT)after",
        device,
        JobSettings(),
    )
    svg = out.read_text()
    assert "Title" in svg
    assert "font-weight=\"bold\"" in svg
    assert "EAN13 123456789012" in svg
    assert "QR (model 2) hi" in svg
    assert "stroke-dasharray" in svg
    assert "after" in svg
