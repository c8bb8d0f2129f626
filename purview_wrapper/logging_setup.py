"""Attach a rotating file handler for CLI runs."""
from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from datetime import datetime
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def _default_filename() -> str:
    script_name = os.path.splitext(os.path.basename(sys.argv[0] or "purview"))[0] or "purview"
    return f"{script_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"


def configure_file_logging(logs_dir: Optional[str] = None,
                           filename: Optional[str] = None,
                           *,
                           max_bytes: int = 5 * 1024 * 1024,
                           backup_count: int = 3,
                           logger_names: Optional[Iterable[str]] = None,
                           level: str = "DEBUG") -> str:
    """Attach a RotatingFileHandler to ``logger_names`` (root logger if None).

    The same file is never attached twice to one logger. Returns the absolute
    path of the log file.
    """
    logs_dir = os.path.abspath(logs_dir or os.path.join(os.getcwd(), "logs"))
    os.makedirs(logs_dir, exist_ok=True)
    log_path = os.path.join(logs_dir, filename or _default_filename())

    targets = [logging.getLogger()] if logger_names is None else [logging.getLogger(n) for n in logger_names]
    handler = None
    for lg in targets:
        already = any(os.path.abspath(getattr(h, "baseFilename", "")) == log_path for h in lg.handlers)
        if not already:
            if handler is None:
                handler = logging.handlers.RotatingFileHandler(log_path, maxBytes=max_bytes,
                                                               backupCount=backup_count, encoding="utf-8")
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
            lg.addHandler(handler)
        lg.setLevel(getattr(logging, level.upper(), logging.INFO))

    logging.getLogger(__name__).info("File logging initialized: %s", log_path)
    return log_path
