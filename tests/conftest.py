from collections import Counter
from datetime import datetime, UTC

import httpx
import pytest

from storjsync.config import Credentials, StorageConfig
from storjsync.error import ObjectNotFoundException
from storjsync.models import ObjectContent, ObjectMetadata

ACCESS_KEY = "jw2examplestorjaccesskey0001"
SECRET_KEY = "jk4examplestorjsecretkey000000000000000000000000001"
REMOTE_MODIFIED = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)


class FakeStorageClient:
    """In-memory stand-in for StorjClient that counts every call."""

    def __init__(
        self,
        body: bytes = b"remote-body",
        last_modified: datetime = REMOTE_MODIFIED,
        exists: bool = True,
        head_error: Exception = None,
        get_error: Exception = None,
    ):
        self.body = body
        self.last_modified = last_modified
        self.exists = exists
        self.head_error = head_error
        self.get_error = get_error
        self.calls = Counter()

    async def head_object(self, bucket_name, object_name):
        self.calls["head_object"] += 1
        if self.head_error is not None:
            raise self.head_error
        if not self.exists:
            raise ObjectNotFoundException(bucket_name, object_name)
        return ObjectMetadata(
            bucket=bucket_name,
            key=object_name,
            last_modified=self.last_modified,
            size=len(self.body),
        )

    async def get_object(self, bucket_name, object_name):
        self.calls["get_object"] += 1
        if self.get_error is not None:
            raise self.get_error
        if not self.exists:
            raise ObjectNotFoundException(bucket_name, object_name)
        return ObjectContent(body=self.body)

    async def get_object_url(self, bucket_name, object_name, expire_seconds=600):
        self.calls["get_object_url"] += 1
        if expire_seconds > 604800:
            raise ValueError("Expiry must be between 1 second and 604800 seconds (7 days).")
        return f"https://gateway.test/{bucket_name}/{object_name}?X-Amz-Expires={expire_seconds}"


@pytest.fixture
def fake_client():
    return FakeStorageClient()


@pytest.fixture
def storage_config():
    return StorageConfig(
        credentials=Credentials(key=ACCESS_KEY, secret=SECRET_KEY),
        region="eu1",
        endpoint="https://gateway.storjshare.io",
    )


@pytest.fixture
def gateway():
    """
    A fake S3 gateway served through httpx.MockTransport.

    ``gateway.objects`` maps "/bucket/key" paths to (body, last_modified);
    ``gateway.requests`` records every request received.
    """

    class Gateway:
        def __init__(self):
            self.objects = {}
            self.requests = []
            self.status_override = None

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if self.status_override is not None:
                return httpx.Response(self.status_override)
            if request.url.path not in self.objects:
                return httpx.Response(404)

            body, last_modified = self.objects[request.url.path]
            headers = {
                "Last-Modified": last_modified.strftime("%a, %d %b %Y %H:%M:%S GMT"),
                "Content-Length": str(len(body)),
                "Content-Type": "application/octet-stream",
                "ETag": '"9b2cf535f27731c974343645a3985328"',
            }
            if request.method == "HEAD":
                return httpx.Response(200, headers=headers)
            return httpx.Response(200, headers=headers, content=body)

        def transport(self) -> httpx.MockTransport:
            return httpx.MockTransport(self.handler)

    return Gateway()
