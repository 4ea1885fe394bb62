"""Tests for storefront startup/shutdown and service wiring."""

import pytest

from conftest import MemoryCache, MemoryDocumentStore, make_post, seed_posts
from storefront import main
from storefront.settings import Settings


@pytest.mark.asyncio
async def test_build_storefront_threads_settings(documents: MemoryDocumentStore, cache: MemoryCache):
    settings = Settings(_env_file=None, top_posts_limit=2)
    seed_posts(documents, [make_post(n) for n in range(1, 6)])

    storefront = main.build_storefront(documents, cache, settings)

    assert storefront.carts.catalog is storefront.catalog
    assert [p.post_id for p in await storefront.feed.top_posts()] == ["post-5", "post-4"]
    products = await storefront.catalog.list_products()
    assert {p.id for p in products} == {"p-1", "p-2"}


@pytest.mark.asyncio
async def test_open_storefront_connects_and_closes(monkeypatch: pytest.MonkeyPatch):
    calls: list[str] = []

    async def record(name, *args):
        calls.append(name)

    monkeypatch.setattr(main, "init_db", lambda url: record("init_db"))
    monkeypatch.setattr(main, "ping_db", lambda: record("ping_db"))
    monkeypatch.setattr(main, "init_redis", lambda url: record("init_redis"))
    monkeypatch.setattr(main, "close_redis", lambda: record("close_redis"))
    monkeypatch.setattr(main, "close_db", lambda: record("close_db"))

    async with main.open_storefront(Settings(_env_file=None)) as storefront:
        assert storefront.feed.page_size == 5
        assert calls == ["init_db", "ping_db", "init_redis"]

    assert calls[-2:] == ["close_redis", "close_db"]


@pytest.mark.asyncio
async def test_open_storefront_closes_on_failed_startup(monkeypatch: pytest.MonkeyPatch):
    closed: list[str] = []

    async def noop(*args):
        return None

    async def refuse():
        raise ConnectionError("postgres down")

    async def close(name):
        closed.append(name)

    monkeypatch.setattr(main, "init_db", noop)
    monkeypatch.setattr(main, "ping_db", refuse)
    monkeypatch.setattr(main, "close_redis", lambda: close("redis"))
    monkeypatch.setattr(main, "close_db", lambda: close("db"))

    with pytest.raises(ConnectionError):
        async with main.open_storefront(Settings(_env_file=None)):
            pass

    assert closed == ["redis", "db"]
