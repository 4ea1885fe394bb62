"""Catalog pass-through over the `Items` collection."""

from storefront.errors import InvalidInputError, NotFoundError
from storefront.schemas import Product
from storefront.stores.protocols import DocumentStore

PRODUCT_COLLECTION = "Items"


class CatalogService:
    def __init__(self, documents: DocumentStore) -> None:
        self.products = documents.collection(PRODUCT_COLLECTION)

    async def list_products(self, filter: str | None = None) -> list[Product]:
        """All products. `filter` is accepted for API compatibility and not applied."""
        return await self.products.get_items(Product)

    async def get_product(self, product_id: str) -> Product | None:
        return await self.products.get_item(product_id, Product)

    async def require_product(self, product_id: str) -> Product:
        """Get a product or raise.

        Raises:
            InvalidInputError: If product_id is empty.
            NotFoundError: If the product does not exist.
        """
        if not product_id:
            raise InvalidInputError("product_id is required")
        product = await self.get_product(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product
