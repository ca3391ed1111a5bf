"""
MiniNote Backend - Upload Store Unit Tests
===========================================

What:  Tests for filename sanitization, size limits, image classification
       and name resolution in UploadStore.
Why:   Upload names come from clients and end up as paths in the note root.
"""

from unittest.mock import patch

import pytest

from mininote.exceptions import NotFoundError, UploadTooLargeError
from mininote.services.upload_store import (
    is_image_name,
    sanitize_filename,
    strip_traversal,
)


class TestSanitizeFilename:
    """Tests for sanitize_filename()."""

    def test_plain_name_unchanged(self):
        assert sanitize_filename("photo.png") == "photo.png"

    def test_replaces_every_unsafe_character(self):
        assert sanitize_filename('a\\b/c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"

    def test_traversal_name_has_no_separators(self):
        sanitized = sanitize_filename("../../etc/passwd")
        assert "/" not in sanitized
        assert "\\" not in sanitized
        assert sanitized == ".._.._etc_passwd"

    def test_empty_becomes_default(self):
        assert sanitize_filename("") == "file"


class TestImageClassification:
    """The extension allow-list decides the embed style."""

    @pytest.mark.parametrize(
        "name",
        ["a.png", "a.jpg", "a.JPEG", "a.gif", "a.webp", "a.bmp", "a.svg"],
    )
    def test_images(self, name):
        assert is_image_name(name) is True

    @pytest.mark.parametrize("name", ["a.pdf", "a.txt", "noext", "png", "a.png.exe"])
    def test_not_images(self, name):
        assert is_image_name(name) is False


class TestStripTraversal:
    def test_strips_nested_sequences(self):
        assert strip_traversal("....//secret") == "secret"
        assert strip_traversal("../../secret") == "secret"
        assert strip_traversal("..\\..\\secret") == "secret"


class TestUploadStoreSave:
    """Tests for UploadStore.save()."""

    @pytest.mark.asyncio
    async def test_save_returns_reference(self, upload_store, note_root):
        with patch("mininote.services.upload_store.time.time", return_value=1718000000.7):
            stored = await upload_store.save("photo.png", b"\x89PNG")

        assert stored.name == "1718000000_photo.png"
        assert stored.url == "/_tmp/1718000000_photo.png"
        assert stored.is_image is True
        assert stored.size == 4
        assert (note_root / stored.name).read_bytes() == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_attachment_is_not_image(self, upload_store):
        stored = await upload_store.save("report.pdf", b"%PDF")
        assert stored.is_image is False

    @pytest.mark.asyncio
    async def test_missing_filename_uses_default(self, upload_store):
        stored = await upload_store.save(None, b"data")
        assert stored.name.endswith("_upload.bin")
        assert stored.is_image is False

    @pytest.mark.asyncio
    async def test_traversal_filename_stays_in_root(self, upload_store, note_root):
        stored = await upload_store.save("../../etc/passwd", b"root:x")

        assert "/" not in stored.name
        assert (note_root / stored.name).is_file()
        assert [p.parent for p in note_root.iterdir()] == [note_root]

    @pytest.mark.asyncio
    async def test_same_name_same_second_overwrites(self, upload_store, note_root):
        with patch("mininote.services.upload_store.time.time", return_value=1718000000):
            await upload_store.save("a.txt", b"first")
            await upload_store.save("a.txt", b"second")

        assert (note_root / "1718000000_a.txt").read_bytes() == b"second"

    @pytest.mark.asyncio
    async def test_too_large_rejected(self, upload_store, note_root):
        with pytest.raises(UploadTooLargeError):
            await upload_store.save("big.bin", b"x" * 1025)
        assert list(note_root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_at_limit_accepted(self, upload_store):
        stored = await upload_store.save("edge.bin", b"x" * 1024)
        assert stored.size == 1024

    def test_reported_length_over_limit_rejected(self, upload_store):
        with pytest.raises(UploadTooLargeError):
            upload_store.validate_size(150 * 1024 * 1024, 0)


class TestUploadStoreResolve:
    """Tests for UploadStore.resolve()."""

    @pytest.mark.asyncio
    async def test_resolves_stored_upload(self, upload_store):
        stored = await upload_store.save("a.txt", b"hi")
        path = await upload_store.resolve(stored.name)
        assert path.read_bytes() == b"hi"

    @pytest.mark.asyncio
    async def test_missing_raises_not_found(self, upload_store):
        with pytest.raises(NotFoundError):
            await upload_store.resolve("1_missing.txt")

    @pytest.mark.asyncio
    async def test_traversal_never_leaves_root(self, upload_store, note_root):
        (note_root.parent / "secret").write_text("outside")

        with pytest.raises(NotFoundError):
            await upload_store.resolve("../../secret")
        with pytest.raises(NotFoundError):
            await upload_store.resolve("../secret")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", ".", "..", ".abc.1234.tmp"])
    async def test_hidden_and_empty_names_rejected(self, upload_store, note_root, name):
        (note_root / ".abc.1234.tmp").write_text("partial")
        with pytest.raises(NotFoundError):
            await upload_store.resolve(name)

    @pytest.mark.asyncio
    async def test_subdirectory_paths_rejected(self, upload_store, note_root):
        (note_root / "sub").mkdir()
        (note_root / "sub" / "file.txt").write_text("nested")

        with pytest.raises(NotFoundError):
            await upload_store.resolve("sub/file.txt")
