# PUBLIC_INTERFACE
"""
Logging helpers.

- JSON or plain single-line output.
- Never log key material or tokens; mask them with mask_secret_value.

The library never configures logging on import; applications (and the demo
runner) call configure_logging once at startup.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

_RESERVED_ATTRS = frozenset(
    (
        "msg", "args", "exc_info", "exc_text", "stack_info", "stacklevel", "levelno", "levelname",
        "msecs", "relativeCreated", "created", "thread", "threadName", "processName", "process",
        "pathname", "filename", "module", "lineno", "funcName", "name", "taskName", "message", "asctime",
    )
)

_PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    """Emit logs as single-line JSON with common fields and extras."""

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Include extras if present (avoid non-serializable)
        for key, val in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps({key: val})
                base[key] = val
            except (TypeError, ValueError):
                base[key] = str(val)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, separators=(",", ":"))


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO", fmt: str = "plain") -> logging.Logger:
    """Attach a stream handler to the root logger once and set its level."""
    logger = logging.getLogger()
    if not any(getattr(h, "_shroud_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler._shroud_handler = True  # type: ignore[attr-defined]
        if fmt.lower() == "json":
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger


# PUBLIC_INTERFACE
def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a module logger; output format and level come from configure_logging."""
    return logging.getLogger(name or "shroud")


# PUBLIC_INTERFACE
def mask_secret_value(value: Optional[str], keep: int = 4) -> Optional[str]:
    """Mask a secret for safe logging. Keep last N chars."""
    if value is None:
        return None
    v = str(value)
    if len(v) <= keep * 2:
        return "*" * len(v)
    return "*" * (len(v) - keep) + v[-keep:]
