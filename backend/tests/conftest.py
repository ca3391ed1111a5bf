"""
MiniNote Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own note root and static root under tmp_path and
       an app built by create_app(settings), so tests never share files.

Fixture Hierarchy:
    settings        Settings pointing at tmp_path roots (small limits on request)
    note_store      NoteStore on the note root
    upload_store    UploadStore on the note root
    static_root     asset directory with a few front-end files
    make_client     factory: AsyncClient for an app built from given settings
    test_client     AsyncClient for the default `settings`
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mininote.config import Settings
from mininote.main import create_app
from mininote.services.note_store import NoteStore
from mininote.services.upload_store import UploadStore


@pytest.fixture
def note_root(tmp_path):
    root = tmp_path / "notes"
    root.mkdir()
    return root


@pytest.fixture
def static_root(tmp_path):
    """
    A STATIC_ROOT with two named assets and one vendored script.

    favicon.ico is deliberately missing.
    """
    root = tmp_path / "static"
    (root / "public" / "js").mkdir(parents=True)
    (root / "styles.css").write_text("body { margin: 0; }")
    (root / "script.js").write_text("console.log('note');")
    (root / "public" / "js" / "marked.min.js").write_text("/* marked */")
    return root


@pytest.fixture
def settings(note_root, static_root):
    return Settings(
        save_path=str(note_root),
        static_root=str(static_root),
        file_limit=100,
        single_file_size_limit=10_240,
        upload_size_limit=1024 * 1024,
        log_level="WARNING",
    )


@pytest.fixture
def note_store(note_root):
    return NoteStore(note_root)


@pytest.fixture
def upload_store(note_root):
    return UploadStore(note_root, max_size=1024)


@pytest_asyncio.fixture
async def make_client():
    """
    Factory for HTTPX AsyncClients talking to a fresh app.

    Usage:
        async def test_limit(make_client, settings):
            client = await make_client(settings.model_copy(update={"file_limit": 1}))
    """
    clients = []

    async def _make(app_settings: Settings) -> AsyncClient:
        app = create_app(app_settings)
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def test_client(make_client, settings):
    """AsyncClient for an app built from the default test settings."""
    return await make_client(settings)
