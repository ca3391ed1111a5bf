"""
MiniNote Backend - Upload Store
================================

What:  Saves uploaded files next to the notes and serves them back by name.
How:   Checks the size ceiling, sanitizes the client filename, prefixes it
       with the unix timestamp, and writes it with the atomic write helper.
Who:   Used by POST /upload (save) and GET /_tmp/{name} (resolve).

Stored names:
    {unix_timestamp}_{sanitized_name}    e.g. 1718000000_photo.png

    Two uploads of the same sanitized name within the same second map to
    the same stored name; the second one replaces the first.

Image classification:
    The extension decides whether the client embeds the upload as an image
    (`![](url)`) or links it as an attachment (`[name](url)`). It is a hint
    only: file contents are never inspected.

Lifecycle:
    Uploads are never updated or deleted by the service. They accumulate
    until purged externally.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Optional, Union

import aiofiles.os

from mininote.exceptions import NotFoundError, UploadTooLargeError
from mininote.services.storage import atomic_write

logger = logging.getLogger(__name__)

# ── Filename Rules ────────────────────────────────────────────────────────
# Characters replaced by "_" in client filenames
UNSAFE_FILENAME_CHARS = frozenset('\\/:*?"<>|')

DEFAULT_SANITIZED_NAME = "file"

# Used when the multipart part carries no filename at all
DEFAULT_UPLOAD_NAME = "upload.bin"

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp", "bmp", "svg"})

URL_PREFIX = "/_tmp/"

# Removed from requested names before lookup
TRAVERSAL_SEQUENCES = ("../", "..\\")


@dataclass(frozen=True)
class StoredUpload:
    """Reference to a saved upload, returned to the client as JSON."""

    name: str
    url: str
    is_image: bool
    size: int


def sanitize_filename(name: str) -> str:
    """Replace path separators and shell metacharacters with underscores."""
    sanitized = "".join("_" if ch in UNSAFE_FILENAME_CHARS else ch for ch in name)
    return sanitized or DEFAULT_SANITIZED_NAME


def file_extension(name: str) -> str:
    """Lower-cased extension without the dot, or "" if there is none."""
    return PurePath(name).suffix.lstrip(".").lower()


def is_image_name(name: str) -> bool:
    return file_extension(name) in IMAGE_EXTENSIONS


def strip_traversal(name: str) -> str:
    """Remove every `../` and `..\\` sequence, repeating until none is left."""
    previous = None
    while previous != name:
        previous = name
        for seq in TRAVERSAL_SEQUENCES:
            name = name.replace(seq, "")
    return name


class UploadStore:
    """
    Manages upload storage inside the note root.

    The directory is shared with the Note Store. Stored names always start
    with digits followed by "_", and a sanitized name cannot contain a path
    separator, so every upload lands directly in the root.
    """

    def __init__(self, root: Union[str, Path], max_size: int):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.max_size = max_size
        logger.info(
            "UploadStore initialized with root=%s max_size=%d",
            self.root,
            self.max_size,
        )

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Enforce the upload ceiling.

        `content_length` is the size the client announced for the part (may
        be None); `actual_size` is the number of bytes received.

        Raises:
            UploadTooLargeError: if either value exceeds the ceiling
        """
        if content_length is not None and content_length > self.max_size:
            raise UploadTooLargeError(limit=self.max_size, size=content_length)
        if actual_size > self.max_size:
            raise UploadTooLargeError(limit=self.max_size, size=actual_size)

    def stored_name_for(self, original_filename: Optional[str]) -> str:
        return f"{int(time.time())}_{sanitize_filename(original_filename or DEFAULT_UPLOAD_NAME)}"

    async def save(
        self,
        original_filename: Optional[str],
        content: bytes,
        content_length: Optional[int] = None,
    ) -> StoredUpload:
        """
        Validate and persist an upload.

        Returns:
            StoredUpload with the `/_tmp/...` URL the client inserts into the note.

        Raises:
            UploadTooLargeError: payload exceeds the ceiling
            StorageError: the file could not be written
        """
        self.validate_size(content_length, len(content))

        stored_name = self.stored_name_for(original_filename)
        await atomic_write(self.root / stored_name, content)

        logger.info("Upload stored: %s (%d bytes)", stored_name, len(content))
        return StoredUpload(
            name=stored_name,
            url=f"{URL_PREFIX}{stored_name}",
            is_image=is_image_name(original_filename or DEFAULT_UPLOAD_NAME),
            size=len(content),
        )

    async def resolve(self, requested_name: str) -> Path:
        """
        Find a previously stored upload by name.

        The name is cleaned of traversal sequences, then the resolved path
        must still be a direct child of the note root. Hidden names
        (temporary files of in-flight writes) are never served.

        Raises:
            NotFoundError: if the name is unusable or no such file exists
        """
        name = strip_traversal(requested_name)
        if not name or name.startswith(".") or "\x00" in name:
            raise NotFoundError(resource="upload", resource_id=requested_name)

        path = (self.root / name).resolve()
        if path.parent != self.root:
            logger.warning("Rejected upload lookup outside root: %r", requested_name)
            raise NotFoundError(resource="upload", resource_id=requested_name)

        if not await aiofiles.os.path.isfile(path):
            raise NotFoundError(resource="upload", resource_id=requested_name)
        return path
