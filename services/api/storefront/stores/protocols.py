"""Gateway contracts the services depend on.

Services only see these protocols; the Postgres and Redis implementations
(and the in-memory fakes used by tests) satisfy them structurally.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class DocumentCollection(Protocol):
    """A document store handle scoped to one named collection."""

    name: str

    async def get_item(self, item_id: str, model: type[ModelT]) -> ModelT | None:
        ...

    async def get_items(self, model: type[ModelT]) -> list[ModelT]:
        ...

    async def create_item(self, item_id: str, item: BaseModel) -> None:
        ...

    async def update_item(self, item_id: str, item: BaseModel) -> None:
        ...

    async def upsert_item(self, item_id: str, item: BaseModel) -> None:
        ...

    async def delete_item(self, item_id: str) -> None:
        ...


class DocumentStore(Protocol):
    def collection(self, name: str) -> DocumentCollection:
        ...


class Cache(Protocol):
    async def get_item(self, key: str, model: type[ModelT]) -> ModelT | None:
        ...

    async def set_item(self, key: str, value: BaseModel) -> None:
        ...

    async def delete_item(self, key: str) -> None:
        ...

    def lock(self, key: str) -> AbstractAsyncContextManager[None]:
        ...
