"""Configuration loading."""

from .settings import FaceApiSettings, get_settings

__all__ = ["FaceApiSettings", "get_settings"]
