# app/core/logging.py
import logging
import time

from fastapi import Request

from app.core.config import APP_NAME, LOG_LEVEL

LOGGER_NAME = "trading"

log = logging.getLogger(LOGGER_NAME)
access_log = logging.getLogger(f"{LOGGER_NAME}.access")


def setup_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    log.info("Logging configured for %s at level %s", APP_NAME, level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


async def access_log_middleware(request: Request, call_next):
    """Log one line per request: method, path, status and elapsed time."""
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_log.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )
