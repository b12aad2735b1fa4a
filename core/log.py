"""Root logger setup for command-line runs. Library modules only call logging.getLogger(__name__)."""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


class PlannerJsonFormatter(jsonlogger.JsonFormatter):
    """JSON lines with level and service name on every record."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["service"] = "quincena-planner"


def setup_logging(level: str = "WARNING", *, json_format: bool = False) -> None:
    logger = logging.getLogger()
    logger.setLevel(level.upper())
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(PlannerJsonFormatter("%(asctime)s %(level)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
