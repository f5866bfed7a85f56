"""store the blob behind a plain http url (GET to load, PUT to write)"""
import asyncio
import logging
from typing import Optional

import aiohttp
from aiolimiter import AsyncLimiter

from clanstats.backends.base import StorageBackend
from clanstats.utils.const import CONTENT_TYPE, DEFAULT_RATE_LIMIT, LOGGER_NAME, REQUEST_TIMEOUT
from clanstats.utils.enums import ErrorKind
from clanstats.utils.errors import StorageError
from clanstats.utils.fetcher import fetch

logger = logging.getLogger(LOGGER_NAME)


class HttpStorage(StorageBackend):
    """Keeps the blob at an url that accepts GET and PUT,
    e.g. a presigned object url or a WebDAV share"""

    def __init__(self,
                 url: str,
                 *,
                 limiter: Optional[AsyncLimiter] = None,
                 timeout: float = REQUEST_TIMEOUT,
                 max_retries: Optional[int] = None):
        self.url = url
        self.limiter = limiter or AsyncLimiter(max_rate=DEFAULT_RATE_LIMIT, time_period=1)
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.retry_kwargs = {} if max_retries is None else {"max_retries": max_retries}

    def __repr__(self) -> str:
        return f"HttpStorage({self.url!r})"

    async def _get(self, session: aiohttp.ClientSession) -> tuple[int, bytes]:
        return await fetch("GET", self.url, session, self.limiter, **self.retry_kwargs)

    async def write(self, content: bytes) -> None:
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                status, previous = await self._get(session)
                if status == 200 and previous == content:
                    logger.debug("Skipping upload to %s as content is the same", self.url)
                    return
                status, body = await fetch("PUT", self.url, session, self.limiter,
                                           data=content,
                                           headers={"Content-Type": CONTENT_TYPE},
                                           **self.retry_kwargs)
        except (aiohttp.ClientError, asyncio.TimeoutError) as ce:
            logger.error("Upload to %s failed: %s", self.url, ce)
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, str(ce)) from ce

        if not 200 <= status < 300:
            logger.error("Upload to %s failed with status %d: %s", self.url, status, body[:200])
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, f"PUT returned {status}")

    async def load(self) -> bytes:
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                status, body = await self._get(session)
        except (aiohttp.ClientError, asyncio.TimeoutError) as ce:
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, str(ce)) from ce

        if status == 404:
            raise StorageError(ErrorKind.NOT_FOUND, f"{self.url} does not exist")
        if status != 200:
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, f"GET returned {status}")
        return body
