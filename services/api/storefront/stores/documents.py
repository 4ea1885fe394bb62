"""Document store backed by the PostgreSQL `documents` table.

Each collection ("Items", "Cart", "Community") is a set of rows sharing the
same `collection` value. Documents are read back into the pydantic model the
caller asks for; writes always replace the whole body.

SQLAlchemy errors are translated to the storefront error taxonomy so services
never see driver exceptions.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
import logging
from typing import Any

from pydantic import BaseModel
from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.errors import DuplicateItemError, NotFoundError, StoreUnavailableError
from storefront.models import Document
from storefront.stores.postgres import get_session
from storefront.stores.protocols import ModelT

logger = logging.getLogger("storefront")


def _to_body(item: BaseModel) -> dict[str, Any]:
    return item.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class PostgresCollection:
    """Collection-scoped handle. Immutable, so it is safe to share across requests."""

    name: str

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with get_session() as session:
                yield session
        except IntegrityError as exc:
            raise DuplicateItemError(
                f"Duplicate document in {self.name}",
                detail={"collection": self.name},
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Document store error on {self.name}: {exc}")
            raise StoreUnavailableError(
                f"Document store unavailable ({self.name})",
                detail={"collection": self.name},
            ) from exc

    async def get_item(self, item_id: str, model: type[ModelT]) -> ModelT | None:
        async with self._session() as session:
            result = await session.execute(
                select(Document.body)
                .where(Document.collection == self.name)
                .where(Document.item_id == item_id)
            )
            body = result.scalar_one_or_none()
        if body is None:
            return None
        return model.model_validate(body)

    async def get_items(self, model: type[ModelT]) -> list[ModelT]:
        """All documents of the collection in insertion order."""
        async with self._session() as session:
            result = await session.execute(
                select(Document.body)
                .where(Document.collection == self.name)
                .order_by(Document.id.asc())
            )
            bodies = result.scalars().all()
        return [model.model_validate(body) for body in bodies]

    async def create_item(self, item_id: str, item: BaseModel) -> None:
        async with self._session() as session:
            session.add(Document(collection=self.name, item_id=item_id, body=_to_body(item)))

    async def update_item(self, item_id: str, item: BaseModel) -> None:
        """Replace the body of an existing document.

        Raises:
            NotFoundError: If no document with this id exists in the collection.
        """
        async with self._session() as session:
            result = await session.execute(
                update(Document)
                .where(Document.collection == self.name)
                .where(Document.item_id == item_id)
                .values(body=_to_body(item), version=Document.version + 1)
            )
            if result.rowcount == 0:
                raise NotFoundError(self.name, item_id)

    async def upsert_item(self, item_id: str, item: BaseModel) -> None:
        """Create the document or replace its body if it already exists."""
        body = _to_body(item)
        stmt = insert(Document).values(collection=self.name, item_id=item_id, body=body, version=1)
        stmt = stmt.on_conflict_do_update(
            constraint="uq_documents_collection_item_id",
            set_={"body": body, "version": Document.version + 1},
        )
        async with self._session() as session:
            await session.execute(stmt)

    async def delete_item(self, item_id: str) -> None:
        async with self._session() as session:
            result = await session.execute(
                delete(Document)
                .where(Document.collection == self.name)
                .where(Document.item_id == item_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(self.name, item_id)


class PostgresDocumentStore:
    """Entry point handing out collection-scoped handles."""

    def collection(self, name: str) -> PostgresCollection:
        return PostgresCollection(name=name)
