import logging
from typing import List

import httpx
from pydantic import TypeAdapter

from folio.errors import LoadError
from folio.schemas.blog import Post
from folio.settings import settings

logger = logging.getLogger(__name__)

_POST_LIST = TypeAdapter(List[Post])


class StaticPostsRepo:
    """
    Holds the post index of one page view.

    ``load()`` makes a single attempt; a failed load is never retried and the
    caller decides how to show it.
    """

    def __init__(self, static_client, index_path: str = settings.POSTS_INDEX_PATH):
        self.static = static_client
        self.index_path = index_path

    async def load(self) -> List[Post]:
        try:
            payload = await self.static.get_json(self.index_path)
        except httpx.HTTPError as e:
            raise LoadError(f"Failed to fetch {self.index_path}: {e}", cause=e) from e
        except ValueError as e:
            raise LoadError(f"Malformed JSON in {self.index_path}: {e}", cause=e) from e

        if not isinstance(payload, list):
            raise LoadError(
                f"Expected a JSON array in {self.index_path}, got {type(payload).__name__}"
            )

        try:
            posts = _POST_LIST.validate_python(payload)
        except ValueError as e:
            raise LoadError(f"Invalid post record in {self.index_path}: {e}", cause=e) from e

        self._warn_on_duplicate_ids(posts)
        logger.info(f"Loaded {len(posts)} posts from {self.index_path}")
        return posts

    @staticmethod
    def _warn_on_duplicate_ids(posts: List[Post]) -> None:
        seen = set()
        for post in posts:
            if post.id in seen:
                logger.warning(f"Duplicate post id {post.id!r}; first occurrence wins")
            seen.add(post.id)
