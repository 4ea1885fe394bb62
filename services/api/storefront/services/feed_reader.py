"""Community feed reads.

- list_posts: all top-level posts, newest first, filtered and paged
- top_posts: newest N posts for the highlights strip (no paging metadata)
- get_post_details: one post with a single page of its responses
"""

from storefront.schemas import Page, Post, PostDetails
from storefront.services.pagination import newest_first, paginate
from storefront.settings import get_settings
from storefront.stores.protocols import DocumentStore

COMMUNITY_COLLECTION = "Community"


class FeedReader:
    def __init__(
        self,
        documents: DocumentStore,
        *,
        page_size: int | None = None,
        top_limit: int | None = None,
    ) -> None:
        settings = get_settings()
        self.posts = documents.collection(COMMUNITY_COLLECTION)
        self.page_size = settings.feed_page_size if page_size is None else page_size
        self.top_limit = settings.top_posts_limit if top_limit is None else top_limit

    async def _newest_posts(self) -> list[Post]:
        return newest_first(await self.posts.get_items(Post))

    async def top_posts(self) -> list[Post]:
        posts = await self._newest_posts()
        return posts[: self.top_limit]

    async def list_posts(self, filter_tag: str | None = None, page_index: int | None = None) -> Page:
        posts = await self._newest_posts()
        return paginate(posts, filter_tag, page_index, page_size=self.page_size)

    async def get_post_details(
        self,
        post_id: str,
        filter_tag: str | None = None,
        page_index: int | None = None,
    ) -> PostDetails:
        """Get a post with one page of its responses.

        The returned post's `responses` holds only the current page. A post
        that does not exist yields an empty PostDetails instead of an error.
        """
        post = await self.posts.get_item(post_id, Post)
        if post is None:
            return PostDetails()
        if not post.responses:
            return PostDetails(post=post)

        page = paginate(newest_first(post.responses), filter_tag, page_index, page_size=self.page_size)
        post.responses = list(page.items)
        return PostDetails(post=post, page=page)
