"""Cart aggregate as stored in the documents table and cached in Redis."""

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.schemas.common import utcnow


class CartLine(BaseModel):
    """One product in a cart. Title and image are captured when the line is created."""

    product: str = Field(min_length=1)
    product_title: str = Field(alias="productTitle", default="")
    product_image: str = Field(alias="productImage", default="")
    quantity: int = Field(ge=1, default=1)

    model_config = {"populate_by_name": True}


class Cart(BaseModel):
    """Shopping cart. At most one line per product id."""

    id: str = Field(min_length=1)
    created_date: datetime = Field(alias="createdDate", default_factory=utcnow)
    update_date: datetime | None = Field(alias="updateDate", default=None)
    items: list[CartLine] = Field(default_factory=list)
    version: int = Field(default=0, ge=0)

    model_config = {"populate_by_name": True}

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.items:
            if line.product == product_id:
                return line
        return None
