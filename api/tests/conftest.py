"""Pytest configuration and shared fixtures.

This module provides:
- Test settings with a fixed shortlink base
- An in-memory resource store with one resource of each kind
- Service objects wired the same way the app wires them
- A FastAPI app + httpx client for route tests
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from core.config import Settings, clear_settings_cache
from core.hooks import HookRegistry
from core.wide_event import clear_wide_event
from repositories.resource_repository import CatalogResourceStore
from schemas import Resource
from services.bootstrap import ShortlinkServices, build_services

# =============================================================================
# Test data
# =============================================================================

# base60 "4c2" == 4 * 3600 + 37 * 60 + 2
ID_4C2 = 16622

RESOURCES = [
    Resource(id=1, permalink="http://example.com/hello-world/", type="post"),
    Resource(id=2, permalink="http://example.com/about/", type="page"),
    Resource(
        id=123,
        permalink="http://example.com/2012/notes/",
        type="post",
        format="standard",
    ),
    Resource(
        id=456,
        permalink="http://example.com/2012/on-the-train/",
        type="post",
        format="status",
    ),
    Resource(
        id=789,
        permalink="http://example.com/2012/sunset/",
        type="post",
        format="gallery",
    ),
    Resource(
        id=790,
        permalink="http://example.com/2012/sunset/sunset-jpg/",
        type="attachment",
        mime_type="image/jpeg",
    ),
    Resource(
        id=791,
        permalink="http://example.com/2012/episode-1/episode-1-mp3/",
        type="attachment",
        mime_type="audio/mpeg",
    ),
    Resource(
        id=ID_4C2,
        permalink="http://example.com/2014/podcast-12/",
        type="post",
        format="audio",
    ),
]


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Settings cache and wide event are process-wide; isolate each test."""
    clear_settings_cache()
    clear_wide_event()
    yield
    clear_settings_cache()
    clear_wide_event()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        home_url="http://example.com",
        shortlink_base="http://ex.am/",
        shortlink_base_override="",
        amazon_affiliate_id="",
        redirect_bases={},
        extra_local_types=[],
        unknown_format_policy="default",
        debug=True,
    )


@pytest.fixture
def store() -> CatalogResourceStore:
    return CatalogResourceStore(RESOURCES)


@pytest.fixture
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def services(
    test_settings: Settings, store: CatalogResourceStore, hooks: HookRegistry
) -> ShortlinkServices:
    return build_services(test_settings, store, hooks)


# =============================================================================
# App fixtures
# =============================================================================


@pytest.fixture
def app(
    test_settings: Settings, store: CatalogResourceStore, hooks: HookRegistry
) -> FastAPI:
    from main import create_app

    return create_app(settings=test_settings, store=store, hooks=hooks)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://testserver", follow_redirects=False
    ) as ac:
        yield ac
