"""Pydantic schemas for the entities the core reads and writes."""

from storefront.schemas.cart import Cart, CartLine
from storefront.schemas.catalog import Product, ProductComponent, ProductMedia
from storefront.schemas.common import ErrorDetail, ErrorResponse, Page
from storefront.schemas.community import Post, PostDetails, PostInput

__all__ = [
    "Cart",
    "CartLine",
    "ErrorDetail",
    "ErrorResponse",
    "Page",
    "Post",
    "PostDetails",
    "PostInput",
    "Product",
    "ProductComponent",
    "ProductMedia",
]
