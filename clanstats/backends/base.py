"""Interface every storage backend implements"""
from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Durable home of a single blob.

    Both operations raise :class:`clanstats.utils.errors.StorageError` on
    any failure. Callers should not depend on which backend they talk to.
    """

    @abstractmethod
    async def write(self, content: bytes) -> None:
        """Replace the stored content. Writing the same content twice is harmless."""
        raise NotImplementedError

    @abstractmethod
    async def load(self) -> bytes:
        """Return the last written content.

        Loading before anything was written fails, there is no empty default.
        """
        raise NotImplementedError
