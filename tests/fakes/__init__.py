"""In-memory fakes for storage backends and cloud clients used in tests."""

from .backends import FailingBackend, MemoryBackend
from .s3 import FakeS3Client, client_error

__all__ = [
    "FailingBackend",
    "MemoryBackend",
    "client_error",
    "FakeS3Client",
]
