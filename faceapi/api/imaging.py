"""JPEG encoding of photos before upload."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from faceapi.api.errors import InvalidResponseError

JPEG_QUALITY = 90


def _save_jpeg(img: Image.Image, quality: int) -> bytes:
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    buffer = BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def encode_jpeg(image: bytes | Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    """Return ``image`` re-encoded as JPEG.

    ``image`` may be raw bytes in any format Pillow can decode or an already
    opened :class:`PIL.Image.Image`. Anything that cannot be turned into a JPEG
    raises :class:`InvalidResponseError`.
    """

    try:
        if isinstance(image, Image.Image):
            return _save_jpeg(image, quality)
        with Image.open(BytesIO(image)) as img:
            return _save_jpeg(img, quality)
    except (OSError, ValueError, TypeError, Image.DecompressionBombError) as exc:
        raise InvalidResponseError("failed to encode jpeg") from exc
