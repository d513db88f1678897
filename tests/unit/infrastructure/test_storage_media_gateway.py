"""Unit tests for the Firebase Storage media gateway."""

from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import ServiceUnavailable

from core.exceptions import GatewayError, ValidationError
from infrastructure.firebase.storage_media_gateway import (
    StorageMediaGateway,
    sniff_image_type,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def bucket() -> MagicMock:
    bucket = MagicMock()
    bucket.blob.return_value.public_url = "https://storage.googleapis.com/b/avatars/x.png"
    return bucket


@pytest.fixture
def gateway(bucket: MagicMock) -> StorageMediaGateway:
    return StorageMediaGateway(bucket, path_prefix="avatars/", max_bytes=1024)


class TestSniffImageType:
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (PNG, ("image/png", "png")),
            (b"\xff\xd8\xff\xe0rest", ("image/jpeg", "jpg")),
            (b"GIF89a...", ("image/gif", "gif")),
            (b"RIFF\x00\x00\x00\x00WEBPVP8 ", ("image/webp", "webp")),
        ],
    )
    def test_detects_type(self, data: bytes, expected: tuple[str, str]):
        assert sniff_image_type(data) == expected

    @pytest.mark.parametrize(
        "data", [b"<html><script>alert(1)</script></html>", b"MZ\x90\x00", b"unknown"]
    )
    def test_rejects_non_image_bytes(self, data: bytes):
        with pytest.raises(ValidationError, match="Unsupported image type"):
            sniff_image_type(data)


class TestUploadImage:
    @pytest.mark.asyncio
    async def test_uploads_public_blob(self, gateway: StorageMediaGateway, bucket: MagicMock):
        url = await gateway.upload_image(PNG)

        assert url == "https://storage.googleapis.com/b/avatars/x.png"
        path = bucket.blob.call_args.args[0]
        assert path.startswith("avatars/")
        assert path.endswith(".png")
        blob = bucket.blob.return_value
        blob.upload_from_string.assert_called_once_with(PNG, content_type="image/png")
        blob.make_public.assert_called_once()

    @pytest.mark.asyncio
    async def test_empty_image_rejected(self, gateway: StorageMediaGateway, bucket: MagicMock):
        with pytest.raises(ValidationError):
            await gateway.upload_image(b"")

        bucket.blob.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_image_never_uploaded(
        self, gateway: StorageMediaGateway, bucket: MagicMock
    ):
        with pytest.raises(ValidationError):
            await gateway.upload_image(b"<html></html>")

        bucket.blob.assert_not_called()

    @pytest.mark.asyncio
    async def test_oversized_image_rejected(self, gateway: StorageMediaGateway):
        with pytest.raises(ValidationError):
            await gateway.upload_image(PNG + b"\x00" * 2048)

    @pytest.mark.asyncio
    async def test_storage_error_wrapped(self, gateway: StorageMediaGateway, bucket: MagicMock):
        bucket.blob.return_value.upload_from_string.side_effect = ServiceUnavailable("down")

        with pytest.raises(GatewayError) as exc_info:
            await gateway.upload_image(PNG)

        assert exc_info.value.gateway == "media"
