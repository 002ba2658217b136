import logging
from typing import Optional

from folio.errors import FolioError, LoadError, NotFoundError
from folio.schemas.blog import Post
from folio.services.post_renderer import render_category_tags
from folio.services.presentation import install_lightbox, install_markdown_styles
from folio.utils import calculate_reading_time, format_date

logger = logging.getLogger(__name__)

ERROR_TEMPLATE = """
<div class="error-message" style="text-align: center; padding: 3rem; color: var(--neon-red)">
  <i class="fas fa-exclamation-triangle" style="font-size: 3rem; margin-bottom: 1rem"></i>
  <h2>{message}</h2>
  <p>Please try again later or <a href="blog.html">return to the blog</a>.</p>
</div>
"""


class PostPageController:
    """Detail page: header fields, markdown body and page metadata for one post."""

    TEMPLATE = "post.html"

    def __init__(self, document, repo, renderer, metadata):
        self.document = document
        self.repo = repo
        self.renderer = renderer
        self.metadata = metadata
        self.current_post: Optional[Post] = None
        self.error: Optional[FolioError] = None
        self._styles_installed = False
        self._lightbox_installed = False

    async def initialize(self, post_id: Optional[str], page_url: str) -> Optional[Post]:
        try:
            if not post_id:
                raise NotFoundError(NotFoundError.MISSING_ID)
            posts = await self.repo.load()
            post = self.renderer.find_post(posts, post_id)
        except NotFoundError as e:
            logger.warning(f"Post not found ({e.reason}): {post_id!r}")
            self.show_error(e)
            return None
        except LoadError as e:
            logger.error(f"Error loading post data: {e}", exc_info=e.cause)
            self.show_error(e)
            return None

        self.current_post = post
        self.metadata.apply(self.document, post, page_url)
        self.render_header(post)
        await self.render_body(post)
        return post

    def render_header(self, post: Post) -> None:
        doc = self.document
        for element_id in ("post-title", "post-title-breadcrumb"):
            element = doc.get_element_by_id(element_id)
            if element is not None:
                doc.set_text(element, post.title)

        date = doc.get_element_by_id("post-date")
        if date is not None:
            doc.set_text(date, format_date(post.date))

        categories = doc.get_element_by_id("post-categories")
        if categories is not None:
            doc.set_inner_html(categories, render_category_tags(post.categories))

        cover = doc.get_element_by_id("post-cover")
        cover_img = doc.get_element_by_id("post-cover-img")
        if cover is not None and cover_img is not None:
            if post.image:
                cover_img["src"] = post.image
                cover_img["alt"] = post.title
                doc.set_display(cover, "block")
            else:
                doc.set_display(cover, "none")

    async def render_body(self, post: Post) -> bool:
        content = self.document.get_element_by_id("post-content")
        if content is None:
            logger.debug("No #post-content container on this page")
            return False

        try:
            rendered = await self.renderer.render_content(post)
        except FolioError as e:
            logger.error(f"Error rendering markdown for {post.id}: {e}", exc_info=e.cause)
            self.show_error(e)
            return False

        self.document.set_inner_html(content, rendered.html)
        reading_time = self.document.get_element_by_id("post-reading-time")
        if reading_time is not None:
            self.document.set_text(reading_time, calculate_reading_time(rendered.markdown))
        self.install_presentation()
        return True

    def install_presentation(self) -> None:
        if not self._styles_installed:
            install_markdown_styles(self.document)
            self._styles_installed = True
        if not self._lightbox_installed:
            install_lightbox(self.document)
            self._lightbox_installed = True

    def show_error(self, error: FolioError) -> None:
        self.error = error
        content = self.document.get_element_by_id("post-content")
        if content is None:
            return
        self.document.set_inner_html(content, ERROR_TEMPLATE.format(message=error.user_message))
