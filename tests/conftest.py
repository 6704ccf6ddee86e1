"""Shared test fixtures for ViralGif-Engine."""

import random
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

SECRET_KEY = "test-secret-key-for-unit-tests"
GENERATED_TEXT = "POV: you finally found the gym class that fits your lunch break"
GIF_BY_ID_URL = "https://media.giphy.com/media/by-id/giphy.gif"
GIF_BY_SEARCH_URL = "https://media.giphy.com/media/by-search/giphy.gif"


def make_settings(**overrides):
    from viralgif_engine.common.config import ViralGifSettings

    defaults = {"secret_key": SECRET_KEY, "db_url": "sqlite+aiosqlite://"}
    defaults.update(overrides)
    return ViralGifSettings(**defaults)


def make_text_generator(text: str = GENERATED_TEXT) -> AsyncMock:
    generator = AsyncMock()
    generator.generate = AsyncMock(return_value=text)
    return generator


def make_media_client(by_id=GIF_BY_ID_URL, by_search=GIF_BY_SEARCH_URL) -> AsyncMock:
    """AsyncMock media client; pass an exception instance to make a lookup fail."""
    client = AsyncMock()
    client.by_id = AsyncMock(
        side_effect=by_id if isinstance(by_id, Exception) else None,
        return_value=by_id,
    )
    client.by_search_term = AsyncMock(
        side_effect=by_search if isinstance(by_search, Exception) else None,
        return_value=by_search,
    )
    return client


def anon_cookie_from(resp) -> str | None:
    """Pull the anon_user_id value out of a response's Set-Cookie header."""
    for header in resp.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        if name.strip() == "anon_user_id":
            return rest.split(";", 1)[0]
    return None


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
async def db(tmp_path):
    from viralgif_engine.common.database import DatabaseManager

    manager = DatabaseManager(make_settings(db_url=f"sqlite+aiosqlite:///{tmp_path}/test.db"))
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def text_generator():
    return make_text_generator()


@pytest.fixture
def media_client():
    return make_media_client()


@pytest.fixture
def app(tmp_path, monkeypatch, text_generator, media_client):
    """Create a test app on a file-backed SQLite DB with fake external services."""
    monkeypatch.setenv("VIRALGIF_DB_URL", f"sqlite+aiosqlite:///{tmp_path}/app.db")
    monkeypatch.setenv("VIRALGIF_SECRET_KEY", SECRET_KEY)
    monkeypatch.setenv("VIRALGIF_TRUST_FORWARDED_FOR", "true")

    # Clear caches and singletons so new env vars take effect
    from viralgif_engine.common.config import get_settings
    get_settings.cache_clear()

    from viralgif_engine.deps import (
        get_catalog,
        get_ledger,
        reset_singletons,
        set_orchestrator,
    )
    reset_singletons()

    from viralgif_engine.generation.media import MediaResolver
    from viralgif_engine.generation.orchestrator import GenerationOrchestrator
    from viralgif_engine.generation.selection import default_selector

    set_orchestrator(GenerationOrchestrator(
        catalog=get_catalog(),
        text_generator=text_generator,
        selector=default_selector(None, random.Random(7)),
        media=MediaResolver.for_client(media_client),
        ledger=get_ledger(),
    ))

    from viralgif_engine.app import create_app
    return create_app()


@pytest.fixture
async def client(app):
    # Manually init DB since ASGITransport doesn't run lifespan
    from viralgif_engine.deps import get_db
    db = get_db()
    await db.init()
    await db.create_all()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()


@pytest.fixture
async def registered_user(client):
    """Create a user in the app DB and return (user, bearer headers)."""
    from viralgif_engine.accounts.service import UserStore
    from viralgif_engine.deps import get_db, get_session_verifier

    async with get_db().get_session() as session:
        user = await UserStore().create_user(session, "member@example.com")
    token = get_session_verifier().issue(user.id)
    return user, {"Authorization": f"Bearer {token}"}
