"""Error kinds raised by the face API client."""

from __future__ import annotations


class FaceApiError(RuntimeError):
    """Base class for every failure surfaced by :class:`FaceApiClient`."""


class NetworkError(FaceApiError):
    """Raised when the transport produced no response at all."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class ServerError(FaceApiError):
    """Raised when the service answered outside the operation's success band."""

    def __init__(self, status_code: int, message: str, code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(message)


class DecodingError(FaceApiError):
    """Raised when a successful response does not match the expected shape."""


class InvalidResponseError(FaceApiError):
    """Raised when a precondition fails or a success payload is incomplete."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownError(FaceApiError):
    """Raised when no usable response was obtained and no transport error was reported."""


def describe_error(error: Exception) -> str:
    """Return the status text shown to the user for ``error``."""

    if isinstance(error, ServerError):
        return error.message
    if isinstance(error, NetworkError):
        return str(error)
    if isinstance(error, DecodingError):
        return "Decoding error"
    if isinstance(error, InvalidResponseError):
        return error.message
    return "Unknown error"
