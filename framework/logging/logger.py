import sys
from pathlib import Path
from typing import Optional
from loguru import logger
from fastapi import Request
from framework.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<magenta>Trace:{extra[trace_id]}</magenta> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | Trace:{extra[trace_id]} - {message}"


class LogConfig:
    """Loguru sinks for the API process: console, daily catalog log, error log."""

    @classmethod
    def setup_logging(cls, level: Optional[str] = None):
        logger.remove()
        logger.configure(extra={"trace_id": "system"})

        logger.add(
            sys.stdout,
            enqueue=True,
            backtrace=True,
            diagnose=settings.DEBUG,  # never dump local variables outside debug
            format=CONSOLE_FORMAT,
            level=level or settings.LOG_LEVEL,
        )
        logger.add(
            LOG_DIR / "catalog_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            compression="zip",
            enqueue=True,
            format=FILE_FORMAT,
            level="DEBUG",
        )
        logger.add(
            LOG_DIR / "error_{time:YYYY-MM-DD}.log",
            rotation="100 MB",
            retention="90 days",
            enqueue=True,
            backtrace=True,
            diagnose=False,
            format=FILE_FORMAT,
            level="ERROR",
        )


def get_logger(name: Optional[str] = None, request: Optional[Request] = None):
    """
    Named logger. Inside a request the trace id comes from LoggingMiddleware's
    contextualize(); pass `request` to pin it explicitly.
    """
    extra = {"name": name} if name else {}
    if request is not None:
        extra["trace_id"] = getattr(request.state, "trace_id", "unknown")
    return logger.bind(**extra)


def format_route(request: Request) -> str:
    """'(HTTP/1.1) GET /api/products?limit=5'"""
    query = f"?{request.url.query}" if request.url.query else ""
    return f"(HTTP/{request.scope.get('http_version', '1.1')}) {request.method} {request.url.path}{query}"


def action_name(request: Request) -> str:
    """Matched endpoint name; the raw path when routing has not happened yet."""
    route = request.scope.get("route")
    return getattr(route, "name", None) or request.url.path
