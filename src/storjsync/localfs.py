"""
Local filesystem helpers used by the sync layer.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

DEFAULT_FILE_MODE = 0o644


def file_exists(path: PathLike) -> bool:
    return Path(path).is_file()


def get_modified_time(path: PathLike) -> float:
    """Modification time of ``path`` as epoch seconds."""
    return Path(path).stat().st_mtime


def _write_atomic(path: Path, data: bytes) -> None:
    """Write data to *path* atomically via temp-file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = path.stat().st_mode & 0o777
    except FileNotFoundError:
        mode = DEFAULT_FILE_MODE

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def write_file(path: PathLike, data: bytes) -> bool:
    """
    Replace ``path`` with ``data``.

    The target only changes once the whole body is on disk, so a failed
    write leaves the previous file (or no file) in place. Returns False
    instead of raising when the write fails.
    """
    target = Path(path)
    try:
        _write_atomic(target, data)
    except OSError as ex:
        logger.warning("Failed to write %s: %s", target, ex)
        return False
    return True
