"""Logging configuration module."""

from __future__ import annotations

import logging

from faceapi.config.settings import FaceApiSettings, get_settings

# httpx logs every request line at INFO; keep it for debug runs only
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def configure_logging(settings: FaceApiSettings | None = None, level: str | None = None) -> None:
    """Configure the root logger from settings or an explicit level name."""

    settings = settings or get_settings()
    resolved = getattr(logging, (level or settings.log_level).upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    transport_level = logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
