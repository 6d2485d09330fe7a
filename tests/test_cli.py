"""Tests for the command-line front end."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from faceapi.cli import main
from faceapi.config.settings import get_settings
from tests.payloads import envelope, error_envelope


@pytest.fixture(autouse=True)
def _cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FACE_API_BASE_URL", "https://faces.test/api/v1.0")
    monkeypatch.setenv("FACE_API_APP_ID", "cli-app")
    monkeypatch.setenv("FACE_API_APP_KEY", "cli-key")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def photo_file(tmp_path: Path, photo: bytes) -> Path:
    path = tmp_path / "selfie.png"
    path.write_bytes(photo)
    return path


def test_identify_prints_match(photo_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=envelope({"templateId": " t1 ", "similarity": 0.8734}))

    code = main(["identify", str(photo_file), "--check-liveness"], transport=httpx.MockTransport(handler))

    assert code == 0
    assert capsys.readouterr().out == "Match:\nt1\nSimilarity: 0.87\n"
    assert seen[0].headers["APP-ID"] == "cli-app"
    assert seen[0].url.params["check_liveness"] == "true"


def test_enroll_prints_template_id(photo_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert b'name="templateId"\r\n\r\nmine\r\n' in request.content
        return httpx.Response(200, json=envelope({"templateId": "mine"}))

    code = main(["enroll", str(photo_file), "--template-id", "mine"], transport=httpx.MockTransport(handler))

    assert code == 0
    assert capsys.readouterr().out == "Enrolled\nTemplate ID:\nmine\n"


def test_identify_renders_server_message(photo_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(400, json=error_envelope(5, "nope")))

    code = main(["identify", str(photo_file)], transport=transport)

    assert code == 1
    assert capsys.readouterr().out == "No faces found\n"


def test_delete_prints_confirmation(capsys: pytest.CaptureFixture[str]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {"templateId": "t9"}
        return httpx.Response(204)

    code = main(["delete", " t9 "], transport=httpx.MockTransport(handler))

    assert code == 0
    assert capsys.readouterr().out == "Deleted\nTemplate ID:\nt9\n"


def test_delete_failure_is_prefixed(capsys: pytest.CaptureFixture[str]) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500, content=b"oops"))

    code = main(["delete", "t9"], transport=transport)

    assert code == 1
    assert capsys.readouterr().out == "Delete failed: server error\n"


def test_blank_delete_never_reaches_network(capsys: pytest.CaptureFixture[str]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    code = main(["delete", "   "], transport=httpx.MockTransport(handler))

    assert code == 1
    assert capsys.readouterr().out == "Delete failed: templateId is empty after trim\n"


def test_missing_photo(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200))

    code = main(["identify", str(tmp_path / "absent.jpg")], transport=transport)

    assert code == 1
    assert capsys.readouterr().out == "No photo\n"


def test_network_failure_is_described(photo_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    code = main(["enroll", str(photo_file)], transport=httpx.MockTransport(handler))

    assert code == 1
    assert capsys.readouterr().out == "Network error: connection refused\n"
