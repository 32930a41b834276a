"""Media library port (abstract interface).

Used at checkout to store an optional image attached to the order.
"""

from abc import ABC, abstractmethod


class MediaLibrary(ABC):
    """Abstract media library interface."""

    @abstractmethod
    async def upload(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> str:
        """Store the file and return its absolute URL.

        Raises UploadFailure when the library rejects the file or returns no URL.
        """
        ...
