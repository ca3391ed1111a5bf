"""
MiniNote Backend - Note Store
==============================

What:  Maps a validated slug to one file in the note root.
How:   read / write / delete / exists / count directly on the filesystem.
       No cache and no index: the directory listing is the source of truth,
       so every write is visible to the next read.
Who:   Used by the note routes; nothing else builds note paths.

Note lifecycle:
    absent ──write(non-empty)──▶ present ──write──▶ present
       ▲                            │
       └──────────delete────────────┘

    There is no tombstone: a missing file IS the "absent" state.

Concurrency:
    Writes go through `atomic_write` (temp file + os.replace), so readers
    never observe a half-written note. No in-process locks are taken; the
    directory is the only synchronization point.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os

from mininote.exceptions import SlugValidationError, StorageError
from mininote.services.slugs import validate_slug
from mininote.services.storage import atomic_write

logger = logging.getLogger(__name__)


class NoteStore:
    """
    File-per-note persistence rooted at a single directory.

    Every public method re-validates the slug before building a path, so
    even a caller bug cannot address a file outside the note root.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info("NoteStore initialized with root=%s", self.root)

    def path_for(self, slug: str) -> Path:
        """
        Resolve the file path of a note.

        Raises:
            SlugValidationError: if `slug` does not match the slug grammar
        """
        if not validate_slug(slug):
            raise SlugValidationError(slug)
        return self.root / slug

    async def read(self, slug: str) -> Optional[bytes]:
        """
        Return the full content of a note, or None if it does not exist.

        Raises:
            StorageError: on a genuine read failure (permissions, I/O)
        """
        path = self.path_for(slug)
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except (FileNotFoundError, IsADirectoryError):
            return None
        except OSError as e:
            logger.error("Failed to read note %s: %s", slug, str(e))
            raise StorageError(
                message="Failed to read note",
                context={"slug": slug, "os_error": str(e)},
            ) from e

    async def exists(self, slug: str) -> bool:
        return await aiofiles.os.path.isfile(self.path_for(slug))

    async def write(self, slug: str, content: bytes) -> None:
        """
        Create or overwrite a note.

        Size and count ceilings are enforced by the caller before this runs.

        Raises:
            StorageError: if the file cannot be written
        """
        path = self.path_for(slug)
        await atomic_write(path, content)
        logger.debug("Note %s written (%d bytes)", slug, len(content))

    async def delete(self, slug: str) -> None:
        """
        Remove a note. Deleting a note that does not exist is not an error.

        Raises:
            StorageError: if an existing file cannot be removed
        """
        path = self.path_for(slug)
        try:
            await aiofiles.os.remove(path)
            logger.debug("Note %s deleted", slug)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error("Failed to delete note %s: %s", slug, str(e))
            raise StorageError(
                message="Failed to delete note",
                context={"slug": slug, "os_error": str(e)},
            ) from e

    async def count(self) -> int:
        """
        Number of regular files directly under the note root.

        Uploads live in the same directory and are counted too;
        sub-directories are not.

        Raises:
            StorageError: if the directory cannot be listed
        """
        try:
            return await asyncio.to_thread(self._count_files)
        except OSError as e:
            logger.error("Failed to count files in %s: %s", self.root, str(e))
            raise StorageError(
                message="Failed to count notes",
                context={"root": str(self.root), "os_error": str(e)},
            ) from e

    def _count_files(self) -> int:
        with os.scandir(self.root) as entries:
            return sum(1 for entry in entries if entry.is_file(follow_symlinks=False))
