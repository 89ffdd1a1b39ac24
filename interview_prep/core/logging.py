import logging
import os
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | "
    "req=%(request_id)s user=%(user_id)s | %(message)s"
)

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def new_request_id(incoming: Optional[str] = None) -> str:
    """Reuse a caller supplied request id, or mint a short random one."""
    if incoming and incoming.strip():
        return incoming.strip()[:64]
    return uuid4().hex[:12]


class ContextFilter(logging.Filter):
    """Stamps records with the current request id and a default user id.

    Handlers pass ``extra={"user_id": ...}`` once the caller is known.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        if not hasattr(record, "user_id"):
            record.user_id = "-"
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Install a single stream handler on the root logger."""
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL).upper(), logging.INFO)
    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
