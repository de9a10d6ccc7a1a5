"""日志配置：控制台输出，可选 JSON 行格式"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime

__all__ = ["setup_logging", "JSONLineFormatter"]

_HANDLER_NAME = "rigcart-console"


class JSONLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "event_type"):
            entry["event_type"] = record.event_type
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_lines: bool = False) -> logging.Logger:
    """配置 rigcart 根日志器，重复调用只替换格式与级别"""
    logger = logging.getLogger("rigcart")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)

    if json_lines:
        handler.setFormatter(JSONLineFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "[RigCart] %(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    return logger
