"""Tests for thermal printer output."""

import sys
from unittest.mock import MagicMock, patch

import pytest
from PIL import ImageFont

from quickshare import printer


@pytest.fixture
def fake_escpos():
    """Stand-in escpos modules so no USB device is needed."""
    device = MagicMock()
    printer_module = MagicMock()
    printer_module.Usb.return_value = device
    with patch.dict(sys.modules, {"escpos": MagicMock(), "escpos.printer": printer_module}):
        yield printer_module, device


class TestResolveFont:
    def test_env_override_wins(self, tmp_path, monkeypatch):
        font = tmp_path / "font.ttf"
        font.write_bytes(b"")
        monkeypatch.setenv("QUICKSHARE_PRINTER_FONT_PATH", str(font))
        assert printer.resolve_printer_font_path() == str(font)

    def test_candidates_skip_blanks_and_repeats(self, monkeypatch):
        monkeypatch.setenv("QUICKSHARE_PRINTER_FONT_PATH", "  ")
        monkeypatch.setattr(printer, "PRINTER_FONT_PATH", "/fonts/a.ttf")
        monkeypatch.setattr(printer, "_LINUX_FONT_FALLBACKS", ("/fonts/a.ttf", "", "/fonts/b.ttf"))
        assert printer._font_candidates() == ["/fonts/a.ttf", "/fonts/b.ttf"]

    def test_no_font_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv("QUICKSHARE_PRINTER_FONT_PATH", raising=False)
        monkeypatch.setattr(printer, "PRINTER_FONT_PATH", str(tmp_path / "missing.ttf"))
        monkeypatch.setattr(printer, "_LINUX_FONT_FALLBACKS", ())
        with pytest.raises(RuntimeError, match="No usable printer font"):
            printer.resolve_printer_font_path()


class TestCheckDependencies:
    def test_missing_font_reports_unavailable(self, fake_escpos):
        with patch.object(printer, "resolve_printer_font_path", side_effect=RuntimeError("no font")):
            ready, message = printer.check_printer_dependencies()
        assert ready is False
        assert "no font" in message

    def test_ready_when_font_loads(self, fake_escpos):
        with patch.object(printer, "resolve_printer_font_path", return_value="font.ttf"), patch(
            "PIL.ImageFont.truetype", return_value=MagicMock()
        ):
            assert printer.check_printer_dependencies() == (True, "Printer ready")


class TestPrintShareText:
    def test_prints_each_line_then_cuts(self, fake_escpos):
        printer_module, device = fake_escpos
        font = ImageFont.load_default()
        with patch.object(printer, "resolve_printer_font_path", return_value="font.ttf"), patch(
            "PIL.ImageFont.truetype", return_value=font
        ):
            printer.print_share_text("QuickShare List: Party\n\n- Tea: 1 box")

        printer_module.Usb.assert_called_once_with(printer.PRINTER_USB_VENDOR_ID, printer.PRINTER_USB_PRODUCT_ID)
        # Three text/blank lines plus the tail spacer.
        assert device.image.call_count == 4
        device.cut.assert_called_once()

    def test_blank_text_is_skipped(self, fake_escpos):
        printer_module, device = fake_escpos
        printer.print_share_text("   \n")
        printer_module.Usb.assert_not_called()
        device.cut.assert_not_called()

    def test_rendered_line_is_printer_width(self):
        img = printer._render_line("Tea: 1 box", ImageFont.load_default())
        assert img.mode == "1"
        assert img.width == printer.PRINTER_WIDTH_PX
