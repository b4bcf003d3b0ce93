"""
Lazy, memoized view of a single remote object.
"""

import logging
from typing import Optional, Tuple

import httpx

from . import localfs
from .decision import SyncState, decide
from .error import (
    AccessDeniedException,
    AuthenticationException,
    ObjectNotFoundException,
    ServerException,
)
from .memoize import Memoizer
from .models import ObjectContent, ObjectMetadata, ObjectReference

logger = logging.getLogger(__name__)

# ConfigurationException is not listed and always reaches the caller.
TRANSPORT_ERRORS = (
    ObjectNotFoundException,
    AuthenticationException,
    AccessDeniedException,
    ServerException,
    httpx.HTTPError,
)


def local_state(path: localfs.PathLike) -> Tuple[bool, Optional[float]]:
    """Return (exists, mtime) for a local file; a vanished file counts as absent."""
    if not localfs.file_exists(path):
        return False, None
    try:
        return True, localfs.get_modified_time(path)
    except OSError:
        return False, None


class RemoteObjectHandle:
    """
    Binds a client to one (bucket, key) pair.

    The HEAD and GET queries each run at most once per handle, so every
    accessor sees the same snapshot of remote state. Any transport failure,
    not-found included, is reported as absence: ``False`` or ``None``.

    Example:
        handle = RemoteObjectHandle(client, "backups", "db/latest.sql.gz")
        if await handle.exists():
            url = await handle.generate_link(3600)
    """

    def __init__(self, client, bucket: str, key: str):
        self.client = client
        self.ref = ObjectReference(bucket=bucket, key=key)
        self._head = Memoizer(self._query_head)
        self._content = Memoizer(self._query_content)

    def __repr__(self) -> str:
        return f"RemoteObjectHandle(bucket={self.ref.bucket!r}, key={self.ref.key!r})"

    def _log_failure(self, operation: str, ex: Exception) -> None:
        if isinstance(ex, ObjectNotFoundException):
            logger.debug("%s: s3://%s/%s not found", operation, self.ref.bucket, self.ref.key)
        else:
            logger.warning(
                "%s failed for s3://%s/%s: %s",
                operation,
                self.ref.bucket,
                self.ref.key,
                ex,
            )

    async def _query_head(self) -> Optional[ObjectMetadata]:
        try:
            return await self.client.head_object(self.ref.bucket, self.ref.key)
        except TRANSPORT_ERRORS as ex:
            self._log_failure("head_object", ex)
            return None

    async def _query_content(self) -> Optional[ObjectContent]:
        try:
            return await self.client.get_object(self.ref.bucket, self.ref.key)
        except TRANSPORT_ERRORS as ex:
            self._log_failure("get_object", ex)
            return None

    async def metadata(self) -> Optional[ObjectMetadata]:
        return await self._head()

    async def exists(self) -> bool:
        return await self._head() is not None

    async def remote_modified_at(self) -> Optional[float]:
        """Remote Last-Modified as epoch seconds, or None when the object is absent."""
        meta = await self._head()
        if meta is None:
            return None
        return meta.last_modified_timestamp

    async def fetch_content(self) -> Optional[ObjectContent]:
        return await self._content()

    async def generate_link(self, expire_seconds: int = 600) -> Optional[str]:
        """
        Presigned download URL valid for ``expire_seconds``.

        Not memoized: every call signs a fresh URL.
        """
        try:
            return await self.client.get_object_url(self.ref.bucket, self.ref.key, expire_seconds)
        except TRANSPORT_ERRORS as ex:
            self._log_failure("get_object_url", ex)
        except ValueError as ex:
            logger.warning("Rejected share link for s3://%s/%s: %s", self.ref.bucket, self.ref.key, ex)
        return None

    async def is_updated(self, local_path: localfs.PathLike) -> bool:
        """True when the remote object exists and the local file is at least as new."""
        local_exists, local_mtime = local_state(local_path)
        decision = decide(
            await self.exists(),
            await self.remote_modified_at(),
            local_exists,
            local_mtime,
        )
        return decision.state is SyncState.UP_TO_DATE

    async def copy(self, local_path: localfs.PathLike) -> bool:
        """Write the remote body to ``local_path``; True only if the write succeeded."""
        content = await self.fetch_content()
        if content is None:
            return False
        return localfs.write_file(local_path, content.body)
