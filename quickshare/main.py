"""Entry point for the QuickShare List Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from quickshare import config
from quickshare.catalog import PresetCatalog
from quickshare.data import build_default_preset
from quickshare.gateway import create_gateway
from quickshare.quickshare_app import QuickShareApp
from quickshare.selection import SelectionStore

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(path: str | Path = config.LOG_PATH, level: str = config.LOG_LEVEL) -> None:
    """Send log records to a file; the terminal belongs to Textual."""
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(log_path, encoding="utf-8")],
        force=True,
    )


def build_app() -> QuickShareApp:
    default = build_default_preset()
    gateway = create_gateway()
    catalog = PresetCatalog(default, gateway, SelectionStore())
    log.info("starting online=%s db=%s user=%s", catalog.online, config.DB_PATH, config.USER_ID)
    return QuickShareApp(catalog)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    build_app().run()


if __name__ == "__main__":
    main()
