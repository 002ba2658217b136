import html
import logging
import urllib.parse
from typing import Iterable, List, Optional, Sequence

from folio.errors import NotFoundError
from folio.schemas.blog import Post, PostCard, PostDetailView
from folio.services.post_filter import normalize_category
from folio.settings import settings
from folio.utils import calculate_reading_time, format_date

logger = logging.getLogger(__name__)

FALLBACK_ICON = '<i class="fas fa-shield-alt"></i>'


def post_link(post_id: str) -> str:
    return f"post.html?id={urllib.parse.quote(post_id, safe='')}"


def render_category_tags(categories: Iterable[str]) -> str:
    return "".join(
        f'<span class="category-tag">{html.escape(cat)}</span>' for cat in categories
    )


def render_card_html(post: Post) -> str:
    if post.image:
        image = (
            f'<img src="{html.escape(post.image)}" '
            f'alt="{html.escape(post.title)}" loading="lazy">'
        )
    else:
        image = FALLBACK_ICON
    return (
        f'<div class="post-card" data-post-id="{html.escape(post.id)}" '
        f'data-href="{html.escape(post_link(post.id))}">'
        f'<div class="post-image">{image}</div>'
        '<div class="post-content">'
        '<div class="post-meta">'
        f'<span class="post-date">{html.escape(format_date(post.date))}</span>'
        f'<div class="post-categories">{render_category_tags(post.categories)}</div>'
        "</div>"
        f'<h3 class="post-title">{html.escape(post.title)}</h3>'
        f'<p class="post-excerpt">{html.escape(post.excerpt)}</p>'
        "</div>"
        "</div>"
    )


class PostRenderer:
    def __init__(self, pipeline, metadata):
        self.pipeline = pipeline
        self.metadata = metadata

    def render_card(self, post: Post) -> PostCard:
        return PostCard(
            id=post.id,
            url=post_link(post.id),
            title=post.title,
            excerpt=post.excerpt,
            date=format_date(post.date),
            categories=list(post.categories),
            category_keys=[normalize_category(cat) for cat in post.categories],
            image=post.image,
            html=render_card_html(post),
        )

    def render(self, posts: Iterable[Post]) -> List[PostCard]:
        return [self.render_card(post) for post in posts]

    def find_post(self, posts: Sequence[Post], post_id: Optional[str]) -> Post:
        """Look up a post, raising NotFoundError with a reason for the logs."""
        if not post_id:
            raise NotFoundError(NotFoundError.MISSING_ID)
        if not posts:
            raise NotFoundError(NotFoundError.EMPTY_INDEX, post_id)
        post = next((p for p in posts if p.id == post_id), None)
        if post is None:
            raise NotFoundError(NotFoundError.NO_MATCH, post_id)
        return post

    async def render_content(self, post: Post):
        return await self.pipeline.render_content(post)

    async def render_detail(
        self, posts: Sequence[Post], post_id: Optional[str], url: Optional[str] = None
    ) -> PostDetailView:
        post = self.find_post(posts, post_id)
        rendered = await self.render_content(post)
        return PostDetailView(
            post=post,
            formatted_date=format_date(post.date),
            reading_time=calculate_reading_time(rendered.markdown),
            content_path=rendered.content_path,
            html=rendered.html,
            metadata=self.metadata.build(post, url or settings.post_url(post.id)),
        )
