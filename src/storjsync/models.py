"""
Data models for storjsync
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional


@dataclass(frozen=True)
class ObjectReference:
    """Identifies a single object inside a bucket."""
    bucket: str
    key: str


@dataclass
class ObjectMetadata:
    """Result of a HEAD request against an object."""
    bucket: str
    key: str
    last_modified: datetime
    size: int = 0
    etag: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def last_modified_timestamp(self) -> float:
        """Last modification instant as epoch seconds."""
        return self.last_modified.timestamp()


@dataclass
class ObjectContent:
    """Body of a fully fetched object."""
    body: bytes
    content_type: Optional[str] = None
    etag: Optional[str] = None


@dataclass(frozen=True)
class SyncOutcome:
    """
    Result of one conditional sync.

    file_copied implies file_exists and not file_updated; a missing remote
    object implies neither of the other flags.
    """
    file_exists: bool = False
    file_updated: bool = False
    file_copied: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return {
            "fileExists": self.file_exists,
            "fileUpdated": self.file_updated,
            "fileCopied": self.file_copied,
        }


@dataclass
class ShareLink:
    """Represents a presigned download URL."""
    url: str
    expires_in_seconds: int
    expires_at: datetime
