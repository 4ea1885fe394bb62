"""Storefront runtime entry point.

Opens the Postgres pool and the Redis client, builds the services on top of
them, and closes both on exit:

    async with open_storefront() as storefront:
        cart = await storefront.carts.add_product(None, "product-1")
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
import logging

from storefront.services.cart import CartService
from storefront.services.catalog import CatalogService
from storefront.services.feed_reader import FeedReader
from storefront.services.feed_writer import FeedWriter
from storefront.settings import Settings, configure_logging, get_settings
from storefront.stores.documents import PostgresDocumentStore
from storefront.stores.postgres import close_db, init_db, ping_db
from storefront.stores.protocols import Cache, DocumentStore
from storefront.stores.redis import RedisCache, close_redis, init_redis

logger = logging.getLogger("storefront")


@dataclass(frozen=True)
class Storefront:
    """The public surface consumed by a request layer."""

    catalog: CatalogService
    carts: CartService
    feed: FeedReader
    feed_writer: FeedWriter


def build_storefront(documents: DocumentStore, cache: Cache, settings: Settings | None = None) -> Storefront:
    settings = settings or get_settings()
    catalog = CatalogService(documents)
    return Storefront(
        catalog=catalog,
        carts=CartService(documents, cache, catalog),
        feed=FeedReader(
            documents,
            page_size=settings.feed_page_size,
            top_limit=settings.top_posts_limit,
        ),
        feed_writer=FeedWriter(documents),
    )


@asynccontextmanager
async def open_storefront(settings: Settings | None = None) -> AsyncGenerator[Storefront, None]:
    """Connect both stores, yield the services, then disconnect."""
    settings = settings or get_settings()
    configure_logging(settings)

    await init_db(settings.async_database_url)
    try:
        await ping_db()
        await init_redis(settings.redis_url)
    except Exception:
        logger.exception("Storefront startup failed")
        await close_redis()
        await close_db()
        raise

    try:
        yield build_storefront(PostgresDocumentStore(), RedisCache(), settings)
    finally:
        await close_redis()
        await close_db()
