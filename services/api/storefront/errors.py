"""Error taxonomy shared by stores and services.

Every error carries a stable `code` so a request layer can render the
standard `{ "error": { "code", "message", "detail" } }` payload.
"""

from typing import Any

from storefront.schemas.common import ErrorDetail, ErrorResponse


class StoreError(RuntimeError):
    """Base class for all storefront errors."""

    code = "STORE_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=ErrorDetail(code=self.code, message=self.message, detail=self.detail)
        )


class NotFoundError(StoreError):
    """A product, post or cart is absent where it is required."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"{entity} {key} not found", detail={"entity": entity, "key": key})
        self.entity = entity
        self.key = key


class InvalidInputError(StoreError):
    code = "INVALID_INPUT"


class DuplicateItemError(StoreError):
    code = "DUPLICATE_ITEM"


class StoreUnavailableError(StoreError):
    """Document store or cache could not be reached. Not retried here."""

    code = "STORE_UNAVAILABLE"


class CartBusyError(StoreUnavailableError):
    """Another request holds the cart lock for longer than we are willing to wait."""

    code = "CART_BUSY"
