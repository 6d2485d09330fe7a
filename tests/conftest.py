"""Shared fixtures for the face API client tests."""

from __future__ import annotations

from io import BytesIO
from typing import Callable

import httpx
import pytest
from PIL import Image

from faceapi.api import FaceApiClient
from faceapi.config.settings import FaceApiSettings

Responder = Callable[[httpx.Request], httpx.Response]
ClientFactory = Callable[[Responder], tuple[FaceApiClient, list[httpx.Request]]]


@pytest.fixture
def settings() -> FaceApiSettings:
    return FaceApiSettings(
        base_url="https://faces.test/api/v1.0",
        app_id="test-app-id",
        app_key="test-app-key",
    )

@pytest.fixture
def photo() -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", (16, 16), color=(200, 120, 80, 255)).save(buffer, format="PNG")
    return buffer.getvalue()

@pytest.fixture
def make_client(settings: FaceApiSettings) -> ClientFactory:
    """Build a client whose transport records requests and answers with ``respond``."""

    def _factory(respond: Responder) -> tuple[FaceApiClient, list[httpx.Request]]:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return respond(request)

        client = FaceApiClient(settings, transport=httpx.MockTransport(handler))
        return client, requests

    return _factory
