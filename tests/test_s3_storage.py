from __future__ import annotations

import asyncio
from typing import Any

import pytest

from clanstats.backends import S3Storage
from clanstats.utils.enums import ErrorKind
from clanstats.utils.errors import StorageError
from fakes import FakeS3Client


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


@pytest.fixture
def fake_client() -> FakeS3Client:
    return FakeS3Client()


def test_write_then_load(fake_client: FakeS3Client) -> None:
    backend = S3Storage("bucket", client=fake_client)

    _run(backend.write(b"blob"))

    assert fake_client.objects[("bucket", "storage.json")] == {
        "Body": b"blob",
        "ContentType": "application/json",
    }
    assert _run(backend.load()) == b"blob"


def test_identical_content_skips_upload(fake_client: FakeS3Client) -> None:
    backend = S3Storage("bucket", "stats.json", client=fake_client)

    _run(backend.write(b"blob"))
    _run(backend.write(b"blob"))
    _run(backend.write(b"changed"))

    assert fake_client.puts == [("bucket", "stats.json"), ("bucket", "stats.json")]


def test_load_missing_object(fake_client: FakeS3Client) -> None:
    with pytest.raises(StorageError) as excinfo:
        _run(S3Storage("bucket", client=fake_client).load())
    assert excinfo.value.kind == ErrorKind.NOT_FOUND


def test_load_failure_is_unreachable(fake_client: FakeS3Client) -> None:
    fake_client.fail_gets = True

    with pytest.raises(StorageError) as excinfo:
        _run(S3Storage("bucket", client=fake_client).load())
    assert excinfo.value.kind == ErrorKind.BACKEND_UNREACHABLE


def test_upload_failure(fake_client: FakeS3Client) -> None:
    fake_client.fail_puts = True

    with pytest.raises(StorageError) as excinfo:
        _run(S3Storage("bucket", client=fake_client).write(b"blob"))
    assert excinfo.value.kind == ErrorKind.BACKEND_UNREACHABLE
