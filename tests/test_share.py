from urllib.parse import parse_qs, urlparse

import pytest

from storjsync.client import StorjClient
from storjsync.handle import RemoteObjectHandle
from storjsync.share import get_download_link, get_storj_download

from conftest import REMOTE_MODIFIED, FakeStorageClient


@pytest.mark.asyncio
async def test_missing_object_gets_no_link():
    client = FakeStorageClient(exists=False)

    link = await get_download_link(RemoteObjectHandle(client, "backups", "gone.bin"))

    assert link is None
    assert client.calls["get_object_url"] == 0


@pytest.mark.asyncio
async def test_existing_object_gets_link_with_default_expiry(fake_client):
    link = await get_download_link(RemoteObjectHandle(fake_client, "backups", "db.sql"))

    assert link == "https://gateway.test/backups/db.sql?X-Amz-Expires=600"


@pytest.mark.asyncio
async def test_link_carries_requested_expiry(storage_config, gateway):
    gateway.objects["/backups/db.sql"] = (b"payload", REMOTE_MODIFIED)

    async with StorjClient(storage_config, transport=gateway.transport()) as client:
        link = await get_storj_download(client, "backups", "db.sql", expire_seconds=3600)

    query = parse_qs(urlparse(link).query)
    assert query["X-Amz-Expires"] == ["3600"]
    assert urlparse(link).path == "/backups/db.sql"
    # Only the existence check reaches the gateway; signing is local.
    assert [r.method for r in gateway.requests] == ["HEAD"]


@pytest.mark.asyncio
async def test_unreachable_gateway_gets_no_link(storage_config, gateway):
    gateway.status_override = 500

    async with StorjClient(storage_config, transport=gateway.transport()) as client:
        assert await get_storj_download(client, "backups", "db.sql") is None
