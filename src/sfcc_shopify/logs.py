from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ISO_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> logging.Logger:
    """Send every record to stdout and, when given, to an append-only log file."""
    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=ISO_DATEFMT, handlers=handlers, force=True)
    return logging.getLogger("sfcc_shopify")
