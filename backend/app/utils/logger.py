"""Logging configuration."""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from app.config import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging for the storefront service."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if settings.log_format == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            rename_fields={"levelname": "level"},
            static_fields={"service": settings.app_name, "environment": settings.environment},
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Driver and server chatter
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    root.info("Logging configured: level=%s, format=%s", settings.log_level, settings.log_format)
