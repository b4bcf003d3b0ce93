"""
storjsync - keep a local file in step with one object in a Storj (S3-compatible) bucket
"""

__version__ = "0.1.0"

from .client import StorjClient, connect
from .config import Credentials, StorageConfig, load_config
from .decision import SyncDecision, SyncState, decide, is_current
from .handle import RemoteObjectHandle
from .memoize import Memoizer, memoize
from .models import (
    ObjectReference,
    ObjectMetadata,
    ObjectContent,
    SyncOutcome,
    ShareLink,
)
from .share import get_download_link, get_storj_download
from .sync import sync_local_file, update_from_storj
from .error import (
    StorjSyncException,
    ObjectNotFoundException,
    AuthenticationException,
    AccessDeniedException,
    ServerException,
    ConfigurationException,
)

__all__ = [
    "StorjClient",
    "connect",
    "Credentials",
    "StorageConfig",
    "load_config",
    "SyncDecision",
    "SyncState",
    "decide",
    "is_current",
    "RemoteObjectHandle",
    "Memoizer",
    "memoize",
    "ObjectReference",
    "ObjectMetadata",
    "ObjectContent",
    "SyncOutcome",
    "ShareLink",
    "get_download_link",
    "get_storj_download",
    "sync_local_file",
    "update_from_storj",
    "StorjSyncException",
    "ObjectNotFoundException",
    "AuthenticationException",
    "AccessDeniedException",
    "ServerException",
    "ConfigurationException",
]
