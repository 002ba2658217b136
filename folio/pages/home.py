import logging

from folio.errors import LoadError
from folio.services.post_filter import latest_posts
from folio.settings import settings

logger = logging.getLogger(__name__)


class HomePageController:
    """Fills the homepage "latest posts" grid."""

    TEMPLATE = "index.html"

    def __init__(self, document, repo, renderer, limit: int = settings.LATEST_POSTS_LIMIT):
        self.document = document
        self.repo = repo
        self.renderer = renderer
        self.limit = limit
        self.posts = []

    async def initialize(self, page_url: str = "") -> None:
        if page_url:
            self.document.set_canonical(page_url)

        container = self.document.get_element_by_id("latest-posts")
        if container is None:
            logger.debug("No #latest-posts container on this page")
            return

        try:
            all_posts = await self.repo.load()
        except LoadError as e:
            logger.error(f"Error loading latest posts: {e}", exc_info=e.cause)
            self.document.set_inner_html(container, f"<p>{LoadError.user_message}</p>")
            return

        self.posts = latest_posts(all_posts, self.limit)
        cards = self.renderer.render(self.posts)
        self.document.set_inner_html(container, "".join(card.html for card in cards))
