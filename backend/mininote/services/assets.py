"""
MiniNote Backend - Static Assets
=================================

What:  Locates the front-end files served byte-for-byte by routes/static.py.
How:   A fixed set of named assets at the top of STATIC_ROOT, plus a
       `public/js/` directory for vendored libraries (marked, clipboard,
       qrcode, mousetrap).
"""

import mimetypes
from pathlib import Path
from typing import Union

import aiofiles.os

from mininote.exceptions import NotFoundError
from mininote.services.upload_store import strip_traversal

NAMED_ASSETS = (
    "styles.css",
    "clippy.svg",
    "favicon.ico",
    "script.js",
    "copy.js",
    "markdown.js",
    "history.js",
)

JS_DIR = Path("public") / "js"

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def guess_media_type(path: Union[str, Path]) -> str:
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type or DEFAULT_MEDIA_TYPE


class StaticAssets:
    """Read-only view of the asset root."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()
        self.js_root = (self.root / JS_DIR).resolve()

    async def named(self, name: str) -> Path:
        """
        Path of one of NAMED_ASSETS.

        Raises:
            NotFoundError: if the name is not a known asset or the file is missing
        """
        if name not in NAMED_ASSETS:
            raise NotFoundError(resource="asset", resource_id=name)
        return await self._existing(self.root / name, name)

    async def script(self, name: str) -> Path:
        """
        Path of a file under public/js, with `../` sequences stripped.

        Raises:
            NotFoundError: if the file is missing or lies outside public/js
        """
        cleaned = strip_traversal(name)
        if not cleaned or "\x00" in cleaned:
            raise NotFoundError(resource="script", resource_id=name)
        path = (self.js_root / cleaned).resolve()
        if not path.is_relative_to(self.js_root):
            raise NotFoundError(resource="script", resource_id=name)
        return await self._existing(path, name)

    async def _existing(self, path: Path, name: str) -> Path:
        if not await aiofiles.os.path.isfile(path):
            raise NotFoundError(resource="asset", resource_id=name)
        return path
