"""Runtime configuration defaults for persistence, logging, sharing and printing."""

from __future__ import annotations

import os


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


DB_PATH = os.environ.get("QUICKSHARE_DB_PATH", "data/quickshare.db")
USER_ID = os.environ.get("QUICKSHARE_USER_ID", "local")
OFFLINE = _env_flag("QUICKSHARE_OFFLINE")

LOG_PATH = os.environ.get("QUICKSHARE_LOG_PATH", "/tmp/quickshare-debug.log")
LOG_LEVEL = os.environ.get("QUICKSHARE_LOG_LEVEL", "INFO").upper()

SHARE_DIR = os.environ.get("QUICKSHARE_SHARE_DIR", "data/shared")

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70
