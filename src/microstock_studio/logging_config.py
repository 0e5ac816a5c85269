"""Structured JSON logging configuration for Microstock Studio.

Call ``configure_logging()`` once at startup (the CLI does this). After that,
every ``logging.getLogger(__name__)`` call produces JSON lines on stderr,
leaving stdout to command output.

``bind_source()`` sets the metadata record currently being processed in a
``contextvars`` variable, so all log records emitted while it is validated
automatically include ``source``.
"""

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# ── Context variable ──────────────────────────────────────────────────────────
# Stores the source label of the record being processed.
_source_var: ContextVar[str] = ContextVar("source", default="")


def get_source() -> str:
    """Return the source label for the current context (empty string if none)."""
    return _source_var.get()


@contextmanager
def bind_source(source: str) -> Iterator[None]:
    """Attach ``source`` to every log record emitted inside the block."""
    token = _source_var.set(source)
    try:
        yield
    finally:
        _source_var.reset(token)


# ── JSON log formatter ────────────────────────────────────────────────────────


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Each record gets the standard fields plus ``source`` (when bound) and
    any extra key-value pairs passed as ``extra=`` to the logger call.
    """

    # Fields that are already represented at the top level.
    _SKIP_ATTRS = frozenset(
        {
            "args",
            "created",
            "exc_info",
            "exc_text",
            "filename",
            "funcName",
            "levelname",
            "levelno",
            "lineno",
            "message",
            "module",
            "msecs",
            "msg",
            "name",
            "pathname",
            "process",
            "processName",
            "relativeCreated",
            "stack_info",
            "taskName",
            "thread",
            "threadName",
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()

        payload: dict = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        source = get_source()
        if source:
            payload["source"] = source

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self._SKIP_ATTRS and not key.startswith("_"):
                payload[key] = value

        return json.dumps(payload, default=str)


# ── Public configuration entry-point ─────────────────────────────────────────


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Replace the root logger's handlers with a single stderr handler.

    Args:
        level: Logging level string, e.g. ``"INFO"``, ``"DEBUG"``, ``"WARNING"``.
        json_format: Emit JSON lines; plain ``LEVEL name: message`` otherwise.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    logging.getLogger(__name__).debug(
        "Logging initialised",
        extra={"log_level": level.upper(), "json_format": json_format},
    )
