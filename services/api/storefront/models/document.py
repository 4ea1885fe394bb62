"""Document model.

One row per document in a named collection. The body is the JSON
serialisation of a pydantic schema (Product, Cart or Post with its
embedded responses).
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from storefront.stores.postgres import Base


class Document(Base):
    """A JSON document addressed by (collection, item_id)."""

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("collection", "item_id", name="uq_documents_collection_item_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    # Collection name: "Items", "Cart", "Community"
    collection: Mapped[str] = mapped_column(String(100), index=True)

    # Public document id (uuid4 for carts and posts)
    item_id: Mapped[str] = mapped_column(String(200))

    body: Mapped[dict[str, Any]] = mapped_column(JSON().with_variant(JSONB(), "postgresql"))

    # Bumped on every overwrite
    version: Mapped[int] = mapped_column(Integer, default=1)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Document {self.collection}/{self.item_id} v{self.version}>"
