"""Wire models exchanged with the face recognition service.

Scalar fields are strict: a number sent as a string, or a string sent as a
number, does not match the wire contract and fails validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ResultT = TypeVar("ResultT")


class WireModel(BaseModel):
    """Base model accepting both wire (camelCase) and Python field names."""

    model_config = ConfigDict(populate_by_name=True)


class ApiEnvelope(WireModel, Generic[ResultT]):
    """Container wrapping every JSON response body."""

    transaction_id: str = Field(alias="transactionId", strict=True)
    result: ResultT


class IdentifyResult(WireModel):
    template_id: str | None = Field(default=None, alias="templateId", strict=True)
    similarity: float | None = Field(default=None, strict=True)


class EnrollmentResult(WireModel):
    template_id: str = Field(alias="templateId", strict=True)


class ErrorResult(WireModel):
    status: str = Field(strict=True)
    code: int = Field(strict=True)
    info: str = Field(strict=True)


ApiErrorResponse = ApiEnvelope[ErrorResult]


class DeleteRequest(WireModel):
    template_id: str = Field(alias="templateId", strict=True)


class DeleteAck(WireModel):
    """Acknowledgement some deployments return with a 200 on delete."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    transaction_id: str | None = Field(default=None, alias="transactionId")
    result: dict[str, Any] | None = None


@dataclass(slots=True, frozen=True)
class IdentifyOutcome:
    """Best matching template returned by a 1:N search."""

    template_id: str
    similarity: float
