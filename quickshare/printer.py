"""Thermal printer output for the shared list."""

from __future__ import annotations

import os
from pathlib import Path

from quickshare.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)

# Extra vertical headroom so descenders are not clipped on thermal output.
_LINE_EXTRA_PX = 18
_BLANK_LINE_PX = 14
_FONT_OVERRIDE_ENV = "QUICKSHARE_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def _font_candidates() -> list[str]:
    """Font paths to try, env override first, without blanks or repeats."""
    ordered = [os.environ.get(_FONT_OVERRIDE_ENV, "").strip(), PRINTER_FONT_PATH, *_LINUX_FONT_FALLBACKS]
    return list(dict.fromkeys(path for path in ordered if path))


def resolve_printer_font_path() -> str:
    """Return the first font file on disk that the share ticket can use."""
    candidates = _font_candidates()
    found = next((path for path in candidates if Path(path).is_file()), None)
    if found is None:
        raise RuntimeError(
            f"No usable printer font among {len(candidates)} candidates "
            f"({', '.join(candidates)}); point {_FONT_OVERRIDE_ENV} at a .ttf or .otf file"
        )
    return found


def check_printer_dependencies() -> tuple[bool, str]:
    """Report whether sharing can also print, as ``(ready, status line)``."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except (ImportError, OSError, RuntimeError) as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def _fit_text_to_px(text: str, font: object, max_width_px: int) -> str:
    from PIL import Image, ImageDraw

    draw = ImageDraw.Draw(Image.new("1", (1, 1), color=1))
    if draw.textbbox((0, 0), text, font=font)[2] <= max_width_px:
        return text
    trimmed = text
    while trimmed:
        candidate = f"{trimmed}..."
        if draw.textbbox((0, 0), candidate, font=font)[2] <= max_width_px:
            return candidate
        trimmed = trimmed[:-1]
    return "..."


def _render_line(text: str, font: object) -> object:
    """Rasterize one share line into a band as wide as the paper.

    The band grows with the glyph box, so the larger title font fits too.
    """
    from PIL import Image, ImageDraw

    text = _fit_text_to_px(text, font, PRINTER_WIDTH_PX - 2 * PRINTER_LEFT_INDENT_PX)
    _, top, _, bottom = ImageDraw.Draw(Image.new("1", (1, 1), color=1)).textbbox((0, 0), text, font=font)
    glyph_px = bottom - top
    band_px = max(PRINTER_FONT_SIZE, glyph_px) + _LINE_EXTRA_PX
    band = _render_spacer(band_px)
    # Shift by the box top so descenders stay on the band.
    ImageDraw.Draw(band).text((PRINTER_LEFT_INDENT_PX, (band_px - glyph_px) // 2 - top), text, font=font, fill=0)
    return band


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def print_share_text(text: str) -> None:
    """Print the share text line by line and cut the ticket."""
    if not text.strip():
        return

    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except ImportError as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font_path = resolve_printer_font_path()
    font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    title_font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE + 6)

    for idx, line in enumerate(text.splitlines()):
        if not line.strip():
            printer.image(_render_spacer(_BLANK_LINE_PX))
            continue
        printer.image(_render_line(line, title_font if idx == 0 else font))

    printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
    printer.cut()
