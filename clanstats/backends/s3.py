"""store the blob as an object in an S3 compatible bucket"""
import asyncio
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from clanstats.backends.base import StorageBackend
from clanstats.utils.const import CONTENT_TYPE, DEFAULT_FILENAME, LOGGER_NAME
from clanstats.utils.enums import ErrorKind
from clanstats.utils.errors import StorageError

logger = logging.getLogger(LOGGER_NAME)

MISSING_OBJECT_CODES = {"NoSuchKey", "404", "NotFound"}


class S3Storage(StorageBackend):
    """Keeps the blob as a single object in a bucket.

    The boto3 client is blocking, every call runs in a worker thread.
    """

    def __init__(self,
                 bucket: str,
                 key: str = DEFAULT_FILENAME,
                 *,
                 client: Any = None,
                 endpoint_url: Optional[str] = None):
        self.bucket = bucket
        self.key = key
        self._client = client or boto3.client("s3", endpoint_url=endpoint_url)

    def __repr__(self) -> str:
        return f"S3Storage('s3://{self.bucket}/{self.key}')"

    def _get(self) -> bytes:
        response = self._client.get_object(Bucket=self.bucket, Key=self.key)
        return response["Body"].read()

    def _put(self, content: bytes) -> None:
        self._client.put_object(Bucket=self.bucket,
                                Key=self.key,
                                Body=content,
                                ContentType=CONTENT_TYPE)

    async def write(self, content: bytes) -> None:
        logger.debug("Storing to S3 bucket %s", self.bucket)
        try:
            previous = await asyncio.to_thread(self._get)
        except (ClientError, BotoCoreError):
            previous = None
        if previous == content:
            logger.debug("Skipping upload as content is the same")
            return

        try:
            await asyncio.to_thread(self._put, content)
        except (ClientError, BotoCoreError) as ce:
            logger.error("Upload to %s failed: %s", self, ce)
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, str(ce)) from ce

    async def load(self) -> bytes:
        try:
            return await asyncio.to_thread(self._get)
        except ClientError as ce:
            code = ce.response.get("Error", {}).get("Code")
            if code in MISSING_OBJECT_CODES:
                raise StorageError(ErrorKind.NOT_FOUND, f"{self} does not exist") from ce
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, str(ce)) from ce
        except BotoCoreError as be:
            raise StorageError(ErrorKind.BACKEND_UNREACHABLE, str(be)) from be
