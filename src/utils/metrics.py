"""Logging configuration and render timing utilities."""

import json
import logging
import time
from typing import Optional


class JsonFormatter(logging.Formatter):
    """Render each log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Format type ('json' or 'text')
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if log_format == "json":
        # JSON format for production
        handler.setFormatter(JsonFormatter())
    else:
        # Human-readable format for development
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logging.basicConfig(level=level, handlers=[handler], force=True)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured: level={log_level}, format={log_format}")


class RenderTimer:
    """Record elapsed milliseconds for each stage of a render."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = time.perf_counter()
        self.last_mark = self.start_time
        self.stages: dict[str, int] = {}

    def mark(self, stage: str) -> int:
        """Close the current stage and return its duration in milliseconds."""
        now = time.perf_counter()
        elapsed_ms = int((now - self.last_mark) * 1000)
        self.last_mark = now
        self.stages[stage] = elapsed_ms
        self.logger.debug(f"Render stage '{stage}' took {elapsed_ms}ms")
        return elapsed_ms

    @property
    def total_ms(self) -> int:
        return int((time.perf_counter() - self.start_time) * 1000)

    def summary(self) -> str:
        parts = [f"{stage}={ms}ms" for stage, ms in self.stages.items()]
        parts.append(f"total={self.total_ms}ms")
        return ", ".join(parts)
