"""Catalog schemas (read-only from the core's point of view)."""

from datetime import datetime

from pydantic import BaseModel, Field


class ProductMedia(BaseModel):
    id: str | None = None
    name: str | None = None
    type: str | None = None
    url: str | None = None
    height: int | None = None
    width: int | None = None
    created_date: datetime | None = Field(alias="createdDate", default=None)
    updated_date: datetime | None = Field(alias="updatedDate", default=None)

    model_config = {"populate_by_name": True}


class ProductComponent(BaseModel):
    id: str | None = None
    component_type: str | None = Field(alias="componentType", default=None)
    component_title: str | None = Field(alias="componentTitle", default=None)
    component_detail: str | None = Field(alias="componentDetail", default=None)
    medias: list[ProductMedia] = Field(default_factory=list)
    created_date: datetime | None = Field(alias="createdDate", default=None)
    updated_date: datetime | None = Field(alias="updatedDate", default=None)

    model_config = {"populate_by_name": True}


class Product(BaseModel):
    """A catalog product stored in the `Items` collection."""

    id: str = Field(min_length=1)
    title: str = ""
    image: str = ""
    price: float = Field(default=0, ge=0)
    description: str | None = None
    url: str | None = None
    components: list[ProductComponent] = Field(default_factory=list)
    created_date: datetime | None = Field(alias="createdDate", default=None)
    updated_date: datetime | None = Field(alias="updatedDate", default=None)

    model_config = {"populate_by_name": True}
