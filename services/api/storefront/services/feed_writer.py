"""Community feed writes.

Responses are embedded in their parent document. Appending one is an
unsynchronized read-modify-write of the parent: two responses submitted at the
same moment can overwrite each other.
"""

import logging
from uuid import uuid4

from storefront.errors import StoreError
from storefront.schemas import Post, PostInput
from storefront.schemas.common import utcnow
from storefront.services.feed_reader import COMMUNITY_COLLECTION
from storefront.stores.protocols import DocumentStore

logger = logging.getLogger("storefront")


def build_post(data: PostInput) -> Post:
    return Post(
        post_id=str(uuid4()),
        title=data.title,
        content=data.content,
        content_type=data.content_type,
        created_date=utcnow(),
        user_id=data.user_id,
        content_url=data.content_url,
        media_description=data.media_description,
    )


class FeedWriter:
    def __init__(self, documents: DocumentStore) -> None:
        self.posts = documents.collection(COMMUNITY_COLLECTION)

    async def create_post(self, data: PostInput) -> Post:
        post = build_post(data)
        await self.posts.create_item(post.post_id, post)
        logger.info(f"Created post {post.post_id} by {post.user_id}")
        return post

    async def create_response(self, data: PostInput) -> Post:
        """Create a response and append it to its parent post.

        The response is returned even when the parent is missing or the append
        fails; those cases are only logged.
        """
        response = build_post(data)
        if not data.post_id:
            return response

        try:
            parent = await self.posts.get_item(data.post_id, Post)
            if parent is None:
                logger.warning(f"Response {response.post_id} dropped: parent {data.post_id} not found")
                return response
            parent.responses.append(response)
            await self.posts.update_item(data.post_id, parent)
        except StoreError as exc:
            logger.warning(f"Failed to append response {response.post_id} to {data.post_id}: {exc}")
        return response
