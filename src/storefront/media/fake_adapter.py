"""In-memory media library for development and testing."""

from uuid import uuid4

from storefront.exceptions import UploadFailure
from storefront.media.port import MediaLibrary


class FakeMediaLibrary(MediaLibrary):
    """Keeps uploaded bytes in memory; can be configured to fail."""

    def __init__(self, base_url: str = "http://media.test") -> None:
        self.base_url = base_url
        self.files: dict[str, bytes] = {}
        self.should_succeed: bool = True
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool) -> None:
        self.should_succeed = should_succeed

    async def upload(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> str:
        self.calls.append({"method": "upload", "filename": filename, "content_type": content_type})
        if not self.should_succeed:
            raise UploadFailure("Upload rejected", status_code=500)

        url = f"{self.base_url}/uploads/{uuid4().hex[:8]}_{filename}"
        self.files[url] = content
        return url
