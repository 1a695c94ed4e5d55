"""
JSON logging setup shared by the entry scripts.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_FIELDS = frozenset(logging.LogRecord(
    "", logging.INFO, "", 0, "", None, None
).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, including structured extra fields."""

    def format(self, record):
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_FIELDS and not key.startswith("_"):
                log_obj[key] = value
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


def setup_logging(log_dir: str = "logs", prefix: str = "chart") -> Path:
    """
    Install a JSON file handler (DEBUG) and a plain console handler (INFO).

    Returns:
        Path of the log file
    """
    directory = Path(log_dir)
    directory.mkdir(exist_ok=True)

    log_file = directory / f"{prefix}_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}.json"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    return log_file
