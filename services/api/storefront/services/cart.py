"""Cart service: consolidates product adds into the cart aggregate.

Storage tiers:
1. Document store `Cart` collection is authoritative
2. Redis holds a write-through copy (read first, refilled on miss)

Concurrency:
- add_product runs its read-modify-write under a per-cart Redis lock, so two
  concurrent adds to the same cart both land (no lost increment)
- Every consolidated write bumps Cart.version
- A cart minted by add_product (no cart id) needs no lock: nobody else knows its id yet
"""

import logging
from uuid import uuid4

from storefront.schemas import Cart, CartLine, Product
from storefront.schemas.common import utcnow
from storefront.services.catalog import CatalogService
from storefront.stores.protocols import Cache, DocumentStore

CART_COLLECTION = "Cart"

logger = logging.getLogger("storefront")


def _line_for(product: Product) -> CartLine:
    return CartLine(
        product=product.id,
        product_title=product.title,
        product_image=product.image,
        quantity=1,
    )


class CartService:
    def __init__(
        self,
        documents: DocumentStore,
        cache: Cache,
        catalog: CatalogService | None = None,
    ) -> None:
        self.carts = documents.collection(CART_COLLECTION)
        self.cache = cache
        self.catalog = catalog or CatalogService(documents)

    async def add_product(self, cart_id: str | None, product_id: str) -> Cart:
        """Add one unit of a product to a cart, creating the cart if needed.

        Args:
            cart_id: Existing (or client-chosen) cart id; empty mints a new cart.
            product_id: Catalog product id.

        Returns:
            The cart as persisted.

        Raises:
            NotFoundError: If the product does not exist (the cart is untouched).
            CartBusyError: If the cart stays locked by another request.
        """
        product = await self.catalog.require_product(product_id)

        if not cart_id:
            cart = Cart(id=str(uuid4()), created_date=utcnow(), items=[_line_for(product)])
            logger.info(f"Created cart {cart.id} with product {product_id}")
            return await self._save(cart)

        async with self.cache.lock(cart_id):
            cart = await self.get_cart(cart_id)
            if cart is None:
                cart = Cart(id=cart_id, created_date=utcnow())
            else:
                cart.update_date = utcnow()

            line = cart.find_line(product_id)
            if line is not None:
                line.quantity += 1
            else:
                cart.items.append(_line_for(product))

            return await self._save(cart)

    async def get_cart(self, cart_id: str) -> Cart | None:
        """Read a cart from the cache, falling back to the store on a miss."""
        cached = await self.cache.get_item(cart_id, Cart)
        if cached is not None:
            return cached

        stored = await self.carts.get_item(cart_id, Cart)
        if stored is not None:
            logger.debug(f"Refilling cache for cart {cart_id}")
            await self.cache.set_item(cart_id, stored)
        return stored

    async def add_cart(self, cart: Cart) -> None:
        await self.carts.create_item(cart.id, cart)
        await self.cache.set_item(cart.id, cart)

    async def update_cart(self, cart: Cart) -> None:
        await self.carts.update_item(cart.id, cart)
        await self.cache.set_item(cart.id, cart)

    async def remove_cart(self, cart: Cart) -> None:
        await self.carts.delete_item(cart.id)
        await self.cache.delete_item(cart.id)

    async def _save(self, cart: Cart) -> Cart:
        # Full overwrite in both tiers; store first so the cache never runs ahead.
        cart.version += 1
        await self.carts.upsert_item(cart.id, cart)
        await self.cache.set_item(cart.id, cart)
        return cart
