"""
Category and free-text filtering over the post index.

Every filter event recomputes from the full collection: the category and
search predicates are always applied together, never on top of a previous
result. Input order is preserved and the input list is never mutated.
"""

import re
from typing import Iterable, List, Sequence

from folio.schemas.blog import CategoryFilter, Post

ALL_CATEGORIES = "all"

_WHITESPACE = re.compile(r"\s+")


def normalize_category(label: str) -> str:
    """Category key: lowercased, whitespace runs collapsed to single hyphens."""
    return _WHITESPACE.sub("-", (label or "").strip().lower())


def normalize_search_term(term: str) -> str:
    return (term or "").strip().lower()


def matches_category(post: Post, category: str) -> bool:
    key = normalize_category(category)
    if not key or key == ALL_CATEGORIES:
        return True
    return any(normalize_category(cat) == key for cat in post.categories)


def matches_search(post: Post, term: str) -> bool:
    needle = normalize_search_term(term)
    if not needle:
        return True
    haystack = [post.title, post.excerpt, *post.categories, *post.tags]
    return any(needle in (field or "").lower() for field in haystack)


def filter_posts(
    posts: Sequence[Post], category: str = ALL_CATEGORIES, search_term: str = ""
) -> List[Post]:
    return [
        post
        for post in posts
        if matches_category(post, category) and matches_search(post, search_term)
    ]


def collect_categories(posts: Iterable[Post]) -> List[str]:
    """Unique category labels in first-seen order."""
    seen = {}
    for post in posts:
        for category in post.categories:
            seen.setdefault(category, None)
    return list(seen)


def category_filters(posts: Iterable[Post]) -> List[CategoryFilter]:
    filters = [CategoryFilter(key=ALL_CATEGORIES, label="All")]
    keys = {ALL_CATEGORIES}
    for label in collect_categories(posts):
        key = normalize_category(label)
        if key and key not in keys:
            keys.add(key)
            filters.append(CategoryFilter(key=key, label=label))
    return filters


def latest_posts(posts: Sequence[Post], limit: int = 3) -> List[Post]:
    return list(posts[: max(limit, 0)])
