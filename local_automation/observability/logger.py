"""
local_automation.observability.logger — One JSON object per log line, plus a console view.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from local_automation.utils.config import ObservabilityConfig

# Record attributes executors attach through ``extra=``
TASK_FIELDS = ("task_id", "executor", "operation")


class JSONFormatter(logging.Formatter):
    """Serialize a record with whichever task fields it carries."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        entry = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name)) for name in TASK_FIELDS if hasattr(record, name)
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _console_handler(level: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", "%H:%M:%S")
    )
    handler.setLevel(level)
    return handler


def _jsonl_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setFormatter(JSONFormatter())
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(config: ObservabilityConfig, debug: bool = False) -> logging.Logger:
    """Attach JSONL (DEBUG) and console handlers to the ``local_automation`` logger.

    Calling again replaces the handlers installed by the previous call. Records
    still propagate, so handlers on the root logger keep seeing them.
    """
    package_logger = logging.getLogger("local_automation")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(_jsonl_handler(Path(config.log_dir) / config.log_file))
    package_logger.addHandler(
        _console_handler("DEBUG" if debug else config.console_level.upper())
    )
    return package_logger
