"""Runtime configuration defaults for storage, logging and timing."""

from __future__ import annotations

import logging
from pathlib import Path

STORAGE_DB_PATH = "data/order_memo.db"

LOG_PATH = "/tmp/order-memo-debug.log"
LOG_LEVEL = logging.INFO

ADDED_NOTICE_SECONDS = 1.5

# Press-and-hold on the quantity button.
HOLD_START_DELAY_SECONDS = 0.3
HOLD_REPEAT_INTERVAL_SECONDS = 0.1


def setup_logging(level: int = LOG_LEVEL, log_path: str = LOG_PATH) -> logging.Logger:
    """Send application logs to a file; the terminal belongs to Textual."""
    log_file = Path(log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s │ %(levelname)-8s │ %(name)-24s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.FileHandler(log_file, encoding="utf-8")],
    )
    return logging.getLogger("order_memo")
