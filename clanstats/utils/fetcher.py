"""rate limited http requests with backoff"""
import logging
import random
import asyncio
from typing import Optional

import aiohttp
from aiolimiter import AsyncLimiter

from clanstats.utils.const import LOGGER_NAME, MAX_RETRIES, RETRY_STATUS_CODES

logger = logging.getLogger(LOGGER_NAME)

async def fetch(method: str,
                url: str,
                session: aiohttp.ClientSession,
                limiter: AsyncLimiter,
                data: Optional[bytes] = None,
                headers: Optional[dict] = None,
                max_retries=MAX_RETRIES) -> tuple[int, bytes]:
    """Performs webrequests, returns status code and body.
    Responses asking us to slow down are retried with exponential backoff"""
    status, body = 0, b""
    for retry in range(max_retries):
        async with limiter:
            async with session.request(method, url, data=data, headers=headers) as response:
                status = response.status
                body = await response.read()
        if status not in RETRY_STATUS_CODES:
            return status, body
        backoff_time = pow(2, retry + random.uniform(0, 1))
        logger.debug("%s %s returned %d, retrying in %.1fs", method, url, status, backoff_time)
        await asyncio.sleep(backoff_time)
    logger.error("Request to url: %s Max retries exceed", url)
    return status, body
