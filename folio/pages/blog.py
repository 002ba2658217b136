"""
Blog list page.

The controller owns the view state the browser page kept in globals: the
full index, the current filtered view, the active category and the search
term. Any change re-derives the filtered view from the full index.
"""

import html
import logging
from typing import List

from folio.errors import LoadError
from folio.schemas.blog import Post
from folio.services.post_filter import (
    ALL_CATEGORIES,
    category_filters,
    filter_posts,
    normalize_category,
)
from folio.settings import settings
from folio.utils import Debouncer

logger = logging.getLogger(__name__)


class BlogPageController:
    TEMPLATE = "blog.html"

    def __init__(
        self,
        document,
        repo,
        renderer,
        debounce_seconds: float = settings.SEARCH_DEBOUNCE_SECONDS,
    ):
        self.document = document
        self.repo = repo
        self.renderer = renderer
        self.all_posts: List[Post] = []
        self.filtered_posts: List[Post] = []
        self.active_category = ALL_CATEGORIES
        self.search_term = ""
        self.loaded = False
        # Awaited with each settled search result, e.g. to push it to a live client
        self.on_results = None
        self._debounced_search = Debouncer(self._settled_search, debounce_seconds)

    async def initialize(
        self, category: str = ALL_CATEGORIES, search_term: str = "", page_url: str = ""
    ) -> None:
        if page_url:
            self.document.set_canonical(page_url)
        if not await self.load_posts():
            return

        self.active_category = normalize_category(category) or ALL_CATEGORIES
        self.search_term = search_term or ""
        self.build_category_filters()
        self._sync_search_input()
        self.refresh()

    async def load_posts(self) -> bool:
        grid = self.document.get_element_by_id("blog-posts")
        if grid is None:
            logger.debug("No #blog-posts container on this page")
            return False

        try:
            self.all_posts = await self.repo.load()
        except LoadError as e:
            logger.error(f"Error loading blog posts: {e}", exc_info=e.cause)
            self.document.set_inner_html(grid, f"<p>{LoadError.user_message}</p>")
            return False

        self.loaded = True
        self.filtered_posts = list(self.all_posts)
        self.display_posts(self.filtered_posts)
        return True

    # --- events ---

    def select_category(self, category: str) -> List[Post]:
        self.active_category = normalize_category(category) or ALL_CATEGORIES
        self._mark_active_filter()
        return self.refresh()

    def perform_search(self, search_term: str) -> List[Post]:
        self.search_term = search_term or ""
        logger.debug(f"Performing search for: {self.search_term.strip()!r}")
        return self.refresh()

    def search_input(self, value: str):
        """Keystroke handler: only the settled value triggers a search."""
        return self._debounced_search(value)

    async def settle(self):
        return await self._debounced_search.flush()

    async def _settled_search(self, search_term: str) -> List[Post]:
        posts = self.perform_search(search_term)
        if self.on_results is not None:
            await self.on_results(posts)
        return posts

    def close(self) -> None:
        if self._debounced_search.pending:
            self._debounced_search.cancel()

    def refresh(self) -> List[Post]:
        self.filtered_posts = filter_posts(
            self.all_posts, self.active_category, self.search_term
        )
        logger.debug(
            f"Filtered posts: {len(self.filtered_posts)} of {len(self.all_posts)} "
            f"(category={self.active_category!r})"
        )
        self.display_posts(self.filtered_posts)
        return self.filtered_posts

    # --- rendering ---

    def display_posts(self, posts: List[Post]) -> None:
        grid = self.document.get_element_by_id("blog-posts")
        if grid is None:
            return
        no_posts = self.document.get_element_by_id("no-posts")

        if not posts:
            self.document.set_inner_html(grid, "")
            self.document.set_display(grid, "none")
            if no_posts is not None:
                self.document.set_display(no_posts, "block")
            return

        self.document.set_display(grid, "grid")
        if no_posts is not None:
            self.document.set_display(no_posts, "none")
        cards = self.renderer.render(posts)
        self.document.set_inner_html(grid, "".join(card.html for card in cards))

    def grid_html(self) -> str:
        grid = self.document.get_element_by_id("blog-posts")
        return grid.decode_contents() if grid is not None else ""

    def build_category_filters(self) -> None:
        container = self.document.select_one(".filter-buttons")
        if container is None:
            return
        buttons = [
            f'<button type="submit" class="filter-btn" name="category" '
            f'value="{html.escape(f.key)}" data-category="{html.escape(f.key)}">'
            f"{html.escape(f.label)}</button>"
            for f in category_filters(self.all_posts)
        ]
        self.document.set_inner_html(container, "".join(buttons))
        self._mark_active_filter()

    def _mark_active_filter(self) -> None:
        for button in self.document.select(".filter-btn"):
            classes = [c for c in button.get("class", []) if c != "active"]
            if button.get("data-category") == self.active_category:
                classes.append("active")
            button["class"] = classes

    def _sync_search_input(self) -> None:
        search_input = self.document.get_element_by_id("search-input")
        if search_input is not None:
            search_input["value"] = self.search_term
