"""
Conditional download of one remote object to a local path.
"""

import logging
from typing import Union

from . import localfs
from .client import StorjClient, connect
from .config import StorageConfig
from .decision import SyncState, decide
from .handle import RemoteObjectHandle, local_state
from .models import SyncOutcome

logger = logging.getLogger(__name__)


async def sync_local_file(handle: RemoteObjectHandle, local_path: localfs.PathLike) -> SyncOutcome:
    """
    Bring ``local_path`` up to date with the object behind ``handle``.

    Nothing is written when the remote object is missing or the local file is
    at least as new. Otherwise the object is fetched and written once;
    ``file_copied`` reports whether that write succeeded.
    """
    if not await handle.exists():
        logger.debug("%r is missing remotely, nothing to sync", handle)
        return SyncOutcome(file_exists=False, file_updated=False, file_copied=False)

    local_exists, local_mtime = local_state(local_path)
    decision = decide(True, await handle.remote_modified_at(), local_exists, local_mtime)

    if decision.state is SyncState.UP_TO_DATE:
        logger.debug("%s is up to date with %r", local_path, handle)
        return SyncOutcome(file_exists=True, file_updated=True, file_copied=False)

    copied = await handle.copy(local_path)
    if copied:
        logger.info("Copied %r to %s", handle, local_path)
    return SyncOutcome(file_exists=True, file_updated=False, file_copied=copied)


async def update_from_storj(
    source: Union[StorageConfig, StorjClient],
    bucket: str,
    local_path: localfs.PathLike,
    key: str,
) -> SyncOutcome:
    """
    Sync ``local_path`` from ``bucket``/``key``.

    ``source`` is either a ready client or a config; a client built here is
    closed before returning. A bad config raises ConfigurationException.
    """
    if isinstance(source, StorjClient):
        return await sync_local_file(RemoteObjectHandle(source, bucket, key), local_path)

    async with connect(source) as client:
        return await sync_local_file(RemoteObjectHandle(client, bucket, key), local_path)
