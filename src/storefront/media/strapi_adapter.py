"""Media library backed by Strapi's upload plugin (``POST /api/upload``)."""

import structlog

from storefront.exceptions import StoreError, UploadFailure
from storefront.media.port import MediaLibrary
from storefront.utils.strapi import StrapiClient

logger = structlog.get_logger(__name__)

FORMAT_PREFERENCE = ("large", "medium", "small")


def uploaded_url(entry: dict) -> str:
    """The original file's URL, falling back to the largest generated format."""
    if entry.get("url"):
        return entry["url"]
    formats = entry.get("formats") or {}
    for name in FORMAT_PREFERENCE:
        url = (formats.get(name) or {}).get("url")
        if url:
            return url
    return ""


class StrapiMediaLibrary(MediaLibrary):
    def __init__(self, client: StrapiClient) -> None:
        self.client = client

    async def upload(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> str:
        try:
            body = await self.client.request(
                "POST", "/upload", files={"files": (filename, content, content_type)}
            )
        except StoreError as exc:
            raise UploadFailure(f"Failed to upload image: {exc}", status_code=exc.status_code) from exc

        if not isinstance(body, list) or not body:
            raise UploadFailure("Invalid response from upload endpoint")

        url = uploaded_url(body[0])
        if not url:
            raise UploadFailure("Upload response carried no file URL")

        url = self.client.absolute_url(url)
        logger.info("image_uploaded", filename=filename, url=url)
        return url
