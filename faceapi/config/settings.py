"""Settings loader for the face API client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_BASE_URL = "https://cloud.ooto-ai.com/api/v1.0"


def _parse_env_line(line: str) -> tuple[str, str] | None:
    stripped = line.strip()
    if stripped.startswith("export "):
        stripped = stripped[len("export "):].lstrip()
    if not stripped or stripped.startswith("#") or "=" not in stripped:
        return None
    key, value = (part.strip() for part in stripped.split("=", 1))
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def _load_env_file(path: str = ".env") -> None:
    """Merge ``KEY=value`` lines from a .env file into the environment.

    Credentials are often kept quoted or with a shell ``export`` prefix, so
    both forms are accepted. Variables already set in the environment win.
    """

    env_path = Path(path)
    if not env_path.is_file():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_env_line(line)
        if parsed is not None:
            os.environ.setdefault(*parsed)


@dataclass(slots=True, frozen=True)
class FaceApiSettings:
    """Endpoint and credentials of the face recognition service."""

    base_url: str = DEFAULT_BASE_URL
    app_id: str = "APP-ID"
    app_key: str = "APP-KEY"
    identify_path: str = "/identify"
    add_path: str = "/add"
    delete_path: str = "/delete"
    request_timeout: float | None = None
    log_level: str = "INFO"


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    return float(raw)


def _build_settings() -> FaceApiSettings:
    _load_env_file()
    return FaceApiSettings(
        base_url=os.getenv("FACE_API_BASE_URL", DEFAULT_BASE_URL),
        app_id=os.getenv("FACE_API_APP_ID", "APP-ID"),
        app_key=os.getenv("FACE_API_APP_KEY", "APP-KEY"),
        identify_path=os.getenv("FACE_API_IDENTIFY_PATH", "/identify"),
        add_path=os.getenv("FACE_API_ADD_PATH", "/add"),
        delete_path=os.getenv("FACE_API_DELETE_PATH", "/delete"),
        request_timeout=_parse_timeout(os.getenv("FACE_API_TIMEOUT")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> FaceApiSettings:
    """Return cached settings instance."""

    return _build_settings()
