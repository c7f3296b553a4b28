import logging
import sys
import contextvars
from typing import Optional

PACKAGE_LOGGER = "paycheckout"

# Remote request id of the call currently in flight
_REQUEST_ID: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class _RequestIdFilter(logging.Filter):
    """Logging filter that stamps records with the request id from contextvars."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "request_id"):
            record.request_id = _REQUEST_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | request=%(request_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _has_filter(filterer: logging.Filterer) -> bool:
    return any(isinstance(f, _RequestIdFilter) for f in filterer.filters)


def configure_package_logger(level: str = "INFO") -> logging.Logger:
    """
    Attach a stdout handler to the ``paycheckout`` logger and set its level.

    The root logger and other libraries' loggers (httpx, httpcore) are left
    alone; records still propagate to whatever handlers the application has.

    Safe to call multiple times; it will not duplicate handlers.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(_has_filter(h) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_build_formatter())
        handler.addFilter(_RequestIdFilter())
        package_logger.addHandler(handler)

    return package_logger


def get_logger(name: str = PACKAGE_LOGGER, level: str = "INFO") -> logging.Logger:
    """Module logger whose records carry the current request id."""
    configure_package_logger(level)
    logger = logging.getLogger(name)
    if not _has_filter(logger):
        logger.addFilter(_RequestIdFilter())
    return logger


def push_request_id(request_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current request id in context and return a token for later reset."""
    if not request_id:
        return None
    return _REQUEST_ID.set(request_id)


def reset_request_id(token: Optional[contextvars.Token]) -> None:
    if token is None:
        return
    _REQUEST_ID.reset(token)
