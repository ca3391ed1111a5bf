"""
MiniNote Backend - Note Service (Write Policy)
===============================================

What:  Applies the size and capacity rules around the Note Store.
Who:   Called by POST /{slug} and GET /{slug}.

Write policy for POST /{slug} with `text`:
    text == ""                       → delete (idempotent), never limited
    UTF-8 size > size ceiling        → NoteSizeLimitError (403)
    slug is new and count >= ceiling → NoteCountLimitError (403)
    otherwise                        → write

Capacity check:
    The ceiling limits creation only; existing notes can always be
    overwritten or deleted. The count is read live from the directory
    and the check is not atomic with the write: two concurrent creations
    at ceiling - 1 may both succeed and leave the store one over the
    ceiling. The ceiling is advisory, so no global lock is taken.
"""

import logging
from enum import Enum
from typing import Optional

from mininote.exceptions import NoteCountLimitError, NoteSizeLimitError
from mininote.services.note_store import NoteStore

logger = logging.getLogger(__name__)


class SaveOutcome(str, Enum):
    WRITTEN = "written"
    DELETED = "deleted"


class NoteService:
    """
    Business rules for note reads and writes.

    Stateless apart from its store and limits; one instance serves all
    requests concurrently.
    """

    def __init__(self, store: NoteStore, file_limit: int, size_limit: int):
        self.store = store
        self.file_limit = file_limit
        self.size_limit = size_limit

    async def load(self, slug: str) -> Optional[bytes]:
        return await self.store.read(slug)

    async def save(self, slug: str, text: str) -> SaveOutcome:
        """
        Write `text` to the note, or delete the note if `text` is empty.

        Raises:
            NoteSizeLimitError: payload above the per-note ceiling
            NoteCountLimitError: new note while the store is at the ceiling
            StorageError: filesystem failure
        """
        if not text:
            await self.store.delete(slug)
            return SaveOutcome.DELETED

        content = text.encode("utf-8")
        if len(content) > self.size_limit:
            raise NoteSizeLimitError(limit=self.size_limit, size=len(content))

        if not await self.store.exists(slug):
            count = await self.store.count()
            if count >= self.file_limit:
                raise NoteCountLimitError(limit=self.file_limit, count=count)

        await self.store.write(slug, content)
        return SaveOutcome.WRITTEN
