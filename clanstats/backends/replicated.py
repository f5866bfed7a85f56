"""Fan the blob out to several backends"""
import asyncio
import logging
from typing import Sequence

from clanstats.backends.base import StorageBackend
from clanstats.utils.const import LOGGER_NAME
from clanstats.utils.errors import ReplicationError

logger = logging.getLogger(LOGGER_NAME)


class Replicated(StorageBackend):
    """Presents several backends as one.

    Writes go to every backend at the same time and succeed when at least one
    backend stored the content. Failed replicas are logged, the caller is not
    told about them.

    Loads try the backends one after the other in list order and return the
    first content that could be read. There is no reconciliation between
    replicas: if the first readable backend missed an earlier write, its
    older content is returned.
    """

    def __init__(self, backends: Sequence[StorageBackend]):
        if len(backends) == 0:
            raise ValueError("Replicated storage needs at least one backend")
        self.backends = list(backends)

    def __repr__(self) -> str:
        return f"Replicated({self.backends!r})"

    async def write(self, content: bytes) -> None:
        results = await asyncio.gather(*(backend.write(content) for backend in self.backends),
                                       return_exceptions=True)

        failures = []
        for backend, result in zip(self.backends, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                failures.append((repr(backend), result))

        if len(failures) == len(self.backends):
            for name, error in failures:
                logger.error("Write to replica %s failed: %s", name, error)
            raise ReplicationError("write", failures)

        for name, error in failures:
            logger.warning("Write to replica %s failed, %d of %d replicas are up to date: %s",
                           name, len(self.backends) - len(failures), len(self.backends), error)

    async def load(self) -> bytes:
        failures = []
        for backend in self.backends:
            try:
                content = await backend.load()
            except Exception as e:
                logger.warning("Load from replica %s failed, trying next one: %s", backend, e)
                failures.append((repr(backend), e))
                continue
            if failures:
                logger.info("Loaded from replica %s after %d failed", backend, len(failures))
            return content

        logger.error("Load failed on all %d replicas", len(self.backends))
        raise ReplicationError("load", failures)
