"""Schemas for the community feed.

A Post and each of its responses share one shape. Responses live inside the
parent document and are never stored on their own.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from storefront.schemas.common import Page, utcnow


class Post(BaseModel):
    """A community post, or a response embedded in one."""

    post_id: str = Field(alias="postId", min_length=1)
    title: str | None = None
    content: str | None = None
    content_type: str | None = Field(alias="contentType", default=None)
    created_date: datetime = Field(alias="createdDate", default_factory=utcnow)
    user_id: str | None = Field(alias="userId", default=None)
    content_url: str | None = Field(alias="contentUrl", default=None)
    media_description: str | None = Field(alias="mediaDescription", default=None)
    responses: list["Post"] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @field_validator("created_date")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        """Older documents carry naive timestamps; read them as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class PostInput(BaseModel):
    """Submitted post or response.

    `post_id` is the parent post when submitting a response and is ignored by
    plain post creation.
    """

    post_id: str | None = Field(alias="postId", default=None)
    title: str | None = None
    content: str | None = None
    content_type: str | None = Field(alias="contentType", default=None)
    user_id: str = Field(alias="userId", min_length=1)
    content_url: str | None = Field(alias="contentUrl", default=None)
    media_description: str | None = Field(alias="mediaDescription", default=None)

    model_config = {"populate_by_name": True, "extra": "forbid"}


class PostDetails(BaseModel):
    """A single post with one page of its responses.

    `post` is None when the requested post does not exist.
    """

    post: Post | None = None
    page: Page = Field(default_factory=Page)
