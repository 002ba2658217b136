import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from folio import dependencies as deps
from folio.errors import ContentLoadError, LoadError, NotFoundError
from folio.repos.posts_repo import StaticPostsRepo
from folio.schemas.blog import CategoryFilter, PostCard, PostDetailView
from folio.services.post_filter import ALL_CATEGORIES, category_filters, filter_posts
from folio.services.post_renderer import PostRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/posts", response_model=List[PostCard])
async def list_posts(
    category: str = ALL_CATEGORIES,
    q: str = "",
    repo: StaticPostsRepo = Depends(deps.get_posts_repo),
    renderer: PostRenderer = Depends(deps.get_post_renderer),
):
    """Post cards, filtered by category and search term."""
    try:
        posts = await repo.load()
        return renderer.render(filter_posts(posts, category, q))
    except HTTPException:
        raise
    except LoadError as e:
        logger.error(f"Error loading posts: {e}")
        raise HTTPException(status_code=502, detail=LoadError.user_message)
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/categories", response_model=List[CategoryFilter])
async def list_categories(repo: StaticPostsRepo = Depends(deps.get_posts_repo)):
    try:
        return category_filters(await repo.load())
    except LoadError as e:
        logger.error(f"Error loading posts: {e}")
        raise HTTPException(status_code=502, detail=LoadError.user_message)


@router.get("/posts/{post_id}", response_model=PostDetailView)
async def get_post(
    post_id: str,
    repo: StaticPostsRepo = Depends(deps.get_posts_repo),
    renderer: PostRenderer = Depends(deps.get_post_renderer),
):
    """A single post with its rendered body and page metadata."""
    try:
        posts = await repo.load()
        return await renderer.render_detail(posts, post_id)
    except HTTPException:
        raise
    except NotFoundError as e:
        logger.warning(f"Post not found ({e.reason}): {post_id!r}")
        raise HTTPException(status_code=404, detail=NotFoundError.user_message)
    except (LoadError, ContentLoadError) as e:
        logger.error(f"Error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=502, detail=e.user_message)
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
