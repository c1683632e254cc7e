"""Process-wide logging setup. Modules only ever call ``logging.getLogger``."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Console handler always; a UTF-8 file handler when *log_file* is set."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in list(root.handlers):
        if getattr(handler, "_storefront", False):
            root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console._storefront = True  # type: ignore[attr-defined]
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler._storefront = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    # SQL statements only when explicitly asked for via database_echo.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
