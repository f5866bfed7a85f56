"""store the blob in a local file"""
import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from clanstats.backends.base import StorageBackend
from clanstats.utils.const import LOGGER_NAME
from clanstats.utils.enums import ErrorKind
from clanstats.utils.errors import StorageError

logger = logging.getLogger(LOGGER_NAME)


class FileStorage(StorageBackend):
    """Keeps the blob in a single file on disk"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileStorage({str(self.path)!r})"

    def _read(self) -> bytes:
        return self.path.read_bytes()

    def _write(self, content: bytes) -> bool:
        try:
            if self.path.read_bytes() == content:
                return False
        except FileNotFoundError:
            pass

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=self.path.parent, prefix=self.path.name + ".",
                                         suffix=".tmp", delete=False) as tmp_file:
            tmp_file.write(content)
        try:
            os.replace(tmp_file.name, self.path)
        except OSError:
            os.unlink(tmp_file.name)
            raise
        return True

    async def write(self, content: bytes) -> None:
        try:
            written = await asyncio.to_thread(self._write, content)
        except OSError as oe:
            logger.error("Cannot write storage file %s: %s", self.path, oe)
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, str(oe)) from oe
        if written:
            logger.debug("Wrote %d bytes to %s", len(content), self.path)
        else:
            logger.debug("Skipping write to %s as content is the same", self.path)

    async def load(self) -> bytes:
        try:
            return await asyncio.to_thread(self._read)
        except FileNotFoundError as fnfe:
            raise StorageError(ErrorKind.NOT_FOUND, f"{self.path} does not exist") from fnfe
        except OSError as oe:
            logger.error("Cannot read storage file %s: %s", self.path, oe)
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, str(oe)) from oe
