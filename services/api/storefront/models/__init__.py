"""SQLAlchemy ORM models.

Models represent database tables:
- documents: JSON documents grouped by collection (Items, Cart, Community)
"""

from storefront.models.document import Document

__all__ = ["Document"]
