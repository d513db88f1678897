"""Media gateway protocol."""

from typing import Protocol


class IMediaGateway(Protocol):
    """Gateway to object storage for profile images."""

    async def upload_image(self, data: bytes) -> str:
        """Upload raw image bytes and return a public download URL."""
        ...
