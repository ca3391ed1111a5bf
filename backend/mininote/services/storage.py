"""
MiniNote Backend - Atomic File Writes
======================================

What:  Shared write primitive for the Note Store and the Upload Store.
How:   Content is written to a hidden temporary file next to the target,
       then moved over the target with os.replace (atomic on POSIX when
       both paths live on the same filesystem).

Invariant:
    A concurrent reader sees either the previous complete file or the new
    complete file, never a partially written one. Concurrent writers to the
    same target race and the last replace wins.
"""

import logging
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os

from mininote.exceptions import StorageError

logger = logging.getLogger(__name__)

TEMP_PREFIX = "."
TEMP_SUFFIX = ".tmp"


def temp_path_for(target: Path) -> Path:
    """Hidden sibling path used while `target` is being written."""
    return target.with_name(f"{TEMP_PREFIX}{target.name}.{uuid.uuid4().hex}{TEMP_SUFFIX}")


async def atomic_write(target: Path, content: bytes) -> None:
    """
    Replace `target` with `content` without exposing a torn file.

    Raises:
        StorageError: if the temporary write or the rename fails. The
            temporary file is removed in that case.
    """
    tmp_path = temp_path_for(target)
    try:
        async with aiofiles.open(tmp_path, "wb") as f:
            await f.write(content)
        await aiofiles.os.replace(tmp_path, target)
    except OSError as e:
        logger.error("Failed to write %s: %s", target.name, str(e))
        await _discard(tmp_path)
        raise StorageError(
            message="Failed to write file",
            context={"path": str(target), "os_error": str(e)},
        ) from e


async def _discard(path: Path) -> None:
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", path, str(e))
