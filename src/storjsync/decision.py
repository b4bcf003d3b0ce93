"""
Freshness policy deciding whether a local file must be replaced.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SyncState(str, Enum):
    MISSING = "missing"
    UP_TO_DATE = "up-to-date"
    STALE = "stale"


@dataclass(frozen=True)
class SyncDecision:
    state: SyncState
    should_copy: bool


def is_current(local_modified_at: float, remote_modified_at: float) -> bool:
    """Local copy is current when it is as new as the remote object or newer."""
    return local_modified_at >= remote_modified_at


def decide(
    remote_exists: bool,
    remote_modified_at: Optional[float],
    local_exists: bool,
    local_modified_at: Optional[float],
) -> SyncDecision:
    """
    Decide from timestamps alone what a sync should do.

    The checks run in order: a missing remote object wins, then a missing local
    file, then the timestamp comparison. Equal timestamps count as up to date.
    """
    if not remote_exists:
        return SyncDecision(SyncState.MISSING, should_copy=False)
    if not local_exists or local_modified_at is None:
        return SyncDecision(SyncState.STALE, should_copy=True)
    if remote_modified_at is not None and is_current(local_modified_at, remote_modified_at):
        return SyncDecision(SyncState.UP_TO_DATE, should_copy=False)
    return SyncDecision(SyncState.STALE, should_copy=True)
