"""Single-shot delivery of client outcomes to callback-style callers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from faceapi.api.errors import FaceApiError

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class ApiResult(Generic[T]):
    """Either the value of a finished operation or the error it failed with."""

    value: T | None = None
    error: FaceApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""

        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def deliver(
    operation: Awaitable[T],
    callback: Callable[[ApiResult[T]], object],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> None:
    """Await ``operation`` and hand its outcome to ``callback`` exactly once.

    When ``loop`` is given the callback is scheduled on it with
    ``call_soon_threadsafe``, which lets a UI running its own loop receive the
    result on its thread.
    """

    try:
        value = await operation
    except FaceApiError as exc:
        result: ApiResult[T] = ApiResult(error=exc)
    else:
        result = ApiResult(value=value)

    if loop is None:
        callback(result)
    else:
        loop.call_soon_threadsafe(callback, result)
