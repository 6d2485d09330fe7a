"""Face recognition cloud API client."""

from .client import FaceApiClient
from .dispatch import ApiResult, deliver
from .errors import (
    DecodingError,
    FaceApiError,
    InvalidResponseError,
    NetworkError,
    ServerError,
    UnknownError,
    describe_error,
)
from .models import IdentifyOutcome

__all__ = [
    "ApiResult",
    "DecodingError",
    "FaceApiClient",
    "FaceApiError",
    "IdentifyOutcome",
    "InvalidResponseError",
    "NetworkError",
    "ServerError",
    "UnknownError",
    "deliver",
    "describe_error",
]
