from abc import ABC, abstractmethod


class ImageFetcherPort(ABC):
    """Port for retrieving photo bytes by reference."""

    @abstractmethod
    async def fetch(self, ref: str) -> bytes:
        """Return the full byte content of a photo.

        Raises PhotoFetchError when the photo is missing or unreachable.
        """
