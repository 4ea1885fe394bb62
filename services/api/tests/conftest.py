"""In-memory gateways standing in for Postgres and Redis.

Both fakes store serialized JSON and yield to the event loop on every call,
so concurrent coroutines interleave the way they would against real I/O.
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from pydantic import BaseModel

from storefront.errors import DuplicateItemError, NotFoundError
from storefront.schemas import Post, Product
from storefront.settings import get_settings


def _dump(item: BaseModel) -> dict[str, Any]:
    return item.model_dump(mode="json", by_alias=True)


class MemoryCollection:
    def __init__(self, name: str, rows: dict[str, dict[str, Any]]) -> None:
        self.name = name
        self.rows = rows
        self.writes = 0

    async def get_item(self, item_id, model):
        await asyncio.sleep(0)
        body = self.rows.get(item_id)
        return None if body is None else model.model_validate(body)

    async def get_items(self, model):
        await asyncio.sleep(0)
        return [model.model_validate(body) for body in self.rows.values()]

    async def create_item(self, item_id, item):
        await asyncio.sleep(0)
        if item_id in self.rows:
            raise DuplicateItemError(f"Duplicate document in {self.name}")
        self.rows[item_id] = _dump(item)
        self.writes += 1

    async def update_item(self, item_id, item):
        await asyncio.sleep(0)
        if item_id not in self.rows:
            raise NotFoundError(self.name, item_id)
        self.rows[item_id] = _dump(item)
        self.writes += 1

    async def upsert_item(self, item_id, item):
        await asyncio.sleep(0)
        self.rows[item_id] = _dump(item)
        self.writes += 1

    async def delete_item(self, item_id):
        await asyncio.sleep(0)
        if self.rows.pop(item_id, None) is None:
            raise NotFoundError(self.name, item_id)


class MemoryDocumentStore:
    def __init__(self) -> None:
        self.data: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self._collections: dict[str, MemoryCollection] = {}

    def collection(self, name: str) -> MemoryCollection:
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name, self.data[name])
        return self._collections[name]


class MemoryCache:
    def __init__(self) -> None:
        self.data: dict[str, dict[str, Any]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def get_item(self, key, model):
        await asyncio.sleep(0)
        body = self.data.get(key)
        return None if body is None else model.model_validate(body)

    async def set_item(self, key, value):
        await asyncio.sleep(0)
        self.data[key] = _dump(value)

    async def delete_item(self, key):
        await asyncio.sleep(0)
        self.data.pop(key, None)

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncGenerator[None, None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            yield


class UnlockedCache(MemoryCache):
    """Cache whose lock does nothing, to show what the lock protects against."""

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncGenerator[None, None]:
        yield


BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_post(n: int, content_type: str | None = "text", **kwargs: Any) -> Post:
    """Post number n, created n minutes after BASE_TIME."""
    return Post(
        post_id=f"post-{n}",
        title=f"Post {n}",
        content=f"content {n}",
        content_type=content_type,
        created_date=BASE_TIME + timedelta(minutes=n),
        user_id="user-1",
        **kwargs,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def documents() -> MemoryDocumentStore:
    store = MemoryDocumentStore()
    for product in (
        Product(id="p-1", title="Surface Pro", image="surface.png", price=999.0),
        Product(id="p-2", title="Xbox", image="xbox.png", price=499.0),
    ):
        store.data["Items"][product.id] = _dump(product)
    return store


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


def seed_posts(store: MemoryDocumentStore, posts: list[Post]) -> None:
    for post in posts:
        store.data["Community"][post.post_id] = _dump(post)
