"""
Expiring download links for remote objects.
"""

from typing import Optional, Union

from .client import StorjClient, connect
from .config import StorageConfig
from .handle import RemoteObjectHandle


async def get_download_link(handle: RemoteObjectHandle, expire_seconds: int = 600) -> Optional[str]:
    """Presigned URL for the object, or None without signing anything if it is missing."""
    if not await handle.exists():
        return None
    return await handle.generate_link(expire_seconds)


async def get_storj_download(
    source: Union[StorageConfig, StorjClient],
    bucket: str,
    key: str,
    expire_seconds: int = 600,
) -> Optional[str]:
    if isinstance(source, StorjClient):
        return await get_download_link(RemoteObjectHandle(source, bucket, key), expire_seconds)

    async with connect(source) as client:
        return await get_download_link(RemoteObjectHandle(client, bucket, key), expire_seconds)
