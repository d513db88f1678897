"""Media gateway backed by Firebase Storage."""

import asyncio
import logging
from uuid import uuid4

from google.api_core.exceptions import GoogleAPIError
from google.cloud.storage import Bucket

from core.config import settings
from core.exceptions import GatewayError, ValidationError

logger = logging.getLogger(__name__)

GATEWAY_NAME = "media"

# (magic prefix, content type, extension)
_IMAGE_SIGNATURES: list[tuple[bytes, str, str]] = [
    (b"\x89PNG\r\n\x1a\n", "image/png", "png"),
    (b"\xff\xd8\xff", "image/jpeg", "jpg"),
    (b"GIF87a", "image/gif", "gif"),
    (b"GIF89a", "image/gif", "gif"),
]


def sniff_image_type(data: bytes) -> tuple[str, str]:
    """Return (content type, extension) for PNG, JPEG, GIF or WebP bytes.

    Raises:
        ValidationError: the bytes are not one of those formats.
    """
    for signature, content_type, extension in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            return content_type, extension
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp", "webp"
    raise ValidationError("Unsupported image type", field="avatar")


class StorageMediaGateway:
    """Uploads profile images to a storage bucket and returns their public URL."""

    def __init__(
        self,
        bucket: Bucket,
        path_prefix: str = settings.avatar_path_prefix,
        max_bytes: int = settings.max_image_bytes,
    ) -> None:
        self._bucket = bucket
        self._path_prefix = path_prefix.strip("/")
        self._max_bytes = max_bytes

    async def upload_image(self, data: bytes) -> str:
        if not data:
            raise ValidationError("Image is empty", field="avatar")
        if len(data) > self._max_bytes:
            raise ValidationError(
                f"Image exceeds {self._max_bytes} bytes", field="avatar"
            )

        content_type, extension = sniff_image_type(data)
        path = f"{self._path_prefix}/{uuid4()}.{extension}"

        def upload() -> str:
            blob = self._bucket.blob(path)
            blob.upload_from_string(data, content_type=content_type)
            blob.make_public()
            return str(blob.public_url)

        try:
            url = await asyncio.to_thread(upload)
        except GoogleAPIError as e:
            logger.error("Upload of %s failed: %s", path, e)
            raise GatewayError(GATEWAY_NAME, str(e)) from e

        logger.info("Uploaded %d bytes to %s", len(data), path)
        return url
