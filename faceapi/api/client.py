"""Async wrapper around the face recognition cloud API."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Mapping, TypeVar

import httpx
from PIL import Image
from pydantic import BaseModel, ValidationError

from faceapi.api.errors import (
    DecodingError,
    InvalidResponseError,
    NetworkError,
    ServerError,
    UnknownError,
)
from faceapi.api.imaging import encode_jpeg
from faceapi.api.models import (
    ApiEnvelope,
    ApiErrorResponse,
    DeleteAck,
    DeleteRequest,
    EnrollmentResult,
    IdentifyOutcome,
    IdentifyResult,
)
from faceapi.config.settings import FaceApiSettings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

NO_FACES_CODE = 5
NO_FACES_MESSAGE = "No faces found"
GENERIC_SERVER_MESSAGE = "server error"
BOUNDARY_PREFIX = "----FaceApi-"

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _check_params(check_liveness: bool, check_deepfake: bool) -> dict[str, str]:
    return {
        "check_liveness": _flag(check_liveness),
        "check_deepfake": _flag(check_deepfake),
    }


class FaceApiClient:
    """Provides identify, enroll and delete calls against the face service."""

    def __init__(
        self,
        settings: FaceApiSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        client_kwargs: dict[str, Any] = {}
        if settings.request_timeout is not None:
            client_kwargs["timeout"] = settings.request_timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(
            base_url=settings.base_url.rstrip("/"),
            headers={
                "APP-ID": settings.app_id,
                "APP-KEY": settings.app_key,
            },
            **client_kwargs,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def identify(
        self,
        image: bytes | Image.Image,
        *,
        check_liveness: bool = False,
        check_deepfake: bool = False,
    ) -> IdentifyOutcome:
        """Search the photo against all enrolled templates and return the best match."""

        photo = await asyncio.to_thread(encode_jpeg, image)
        response = await self._post_multipart(
            self._settings.identify_path,
            self._photo_files(photo),
            params=_check_params(check_liveness, check_deepfake),
        )
        if response.status_code != 200:
            raise self._server_error(response, overrides={NO_FACES_CODE: NO_FACES_MESSAGE})

        envelope = self._decode(ApiEnvelope[IdentifyResult], response)
        result = envelope.result
        if result.template_id is None or result.similarity is None:
            raise InvalidResponseError("empty identify result")
        return IdentifyOutcome(template_id=result.template_id, similarity=result.similarity)

    async def enroll(
        self,
        image: bytes | Image.Image,
        custom_template_id: str | None = None,
        *,
        check_liveness: bool = False,
        check_deepfake: bool = False,
    ) -> str:
        """Register the photo as a new template and return its id."""

        photo = await asyncio.to_thread(encode_jpeg, image)
        files = self._photo_files(photo)
        if custom_template_id is not None:
            files.append(("templateId", (None, custom_template_id.encode("utf-8"))))

        response = await self._post_multipart(
            self._settings.add_path,
            files,
            params=_check_params(check_liveness, check_deepfake),
        )
        if response.status_code != 200:
            raise self._server_error(response)

        envelope = self._decode(ApiEnvelope[EnrollmentResult], response)
        return envelope.result.template_id

    async def delete_template(self, template_id: str) -> None:
        """Delete a previously enrolled template."""

        trimmed = template_id.strip()
        if not trimmed:
            raise InvalidResponseError("templateId is empty after trim")

        body = DeleteRequest(template_id=trimmed).model_dump(by_alias=True)
        response = await self._post(
            self._settings.delete_path,
            json_body=body,
            headers=JSON_HEADERS,
        )
        if response.is_success:
            if response.status_code == 200 and response.content:
                self._read_delete_ack(response)
            return
        raise self._server_error(response)

    @staticmethod
    def _photo_files(photo: bytes) -> list[tuple[str, tuple[Any, ...]]]:
        return [("photo", ("image.jpg", photo, "image/jpeg"))]

    async def _post_multipart(
        self,
        endpoint: str,
        files: list[Any],
        *,
        params: Mapping[str, str],
    ) -> httpx.Response:
        boundary = f"{BOUNDARY_PREFIX}{uuid.uuid4().hex}"
        return await self._post(
            endpoint,
            params=params,
            files=files,
            headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
        )

    async def _post(
        self,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        files: list[Any] | None = None,
        json_body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        logger.debug("POST %s params=%s", endpoint, params)
        try:
            return await self._client.post(
                endpoint,
                params=params,
                files=files,
                json=json_body,
                headers=headers,
            )
        except httpx.TransportError as exc:
            logger.warning("Face API request to %s failed: %s", endpoint, exc)
            raise NetworkError(exc) from exc
        except httpx.HTTPError as exc:
            raise UnknownError(str(exc)) from exc

    @staticmethod
    def _decode(model: type[ModelT], response: httpx.Response) -> ModelT:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodingError(f"unexpected response body from {response.url.path}") from exc

    @staticmethod
    def _server_error(
        response: httpx.Response,
        *,
        overrides: Mapping[int, str] | None = None,
    ) -> ServerError:
        try:
            envelope = ApiErrorResponse.model_validate_json(response.content)
        except ValidationError:
            logger.debug("Error body from %s is not an error envelope.", response.url.path)
            error = ServerError(response.status_code, GENERIC_SERVER_MESSAGE, None)
        else:
            details = envelope.result
            message = (overrides or {}).get(details.code, details.info)
            error = ServerError(response.status_code, message, details.code)
        logger.warning(
            "Face API %s returned %s (code=%s): %s",
            response.url.path,
            response.status_code,
            error.code,
            error.message,
        )
        return error

    @staticmethod
    def _read_delete_ack(response: httpx.Response) -> None:
        try:
            ack = DeleteAck.model_validate_json(response.content)
        except ValidationError:
            logger.debug("Ignoring unparseable delete acknowledgement.")
            return
        logger.debug("Delete acknowledged, transaction %s", ack.transaction_id)
