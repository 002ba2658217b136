import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, WebSocket, WebSocketDisconnect, status
from fastapi.responses import HTMLResponse

from folio import dependencies as deps
from folio.document import PageDocument
from folio.pages.blog import BlogPageController
from folio.pages.home import HomePageController
from folio.pages.post import PostPageController
from folio.services.post_filter import ALL_CATEGORIES

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/index.html", response_class=HTMLResponse)
async def home_page(
    request: Request,
    repo=Depends(deps.get_posts_repo),
    renderer=Depends(deps.get_post_renderer),
):
    controller = HomePageController(
        PageDocument.from_template(HomePageController.TEMPLATE), repo, renderer
    )
    await controller.initialize(page_url=str(request.url))
    return HTMLResponse(controller.document.render())


@router.get("/blog.html", response_class=HTMLResponse)
async def blog_page(
    request: Request,
    category: str = ALL_CATEGORIES,
    q: str = "",
    repo=Depends(deps.get_posts_repo),
    renderer=Depends(deps.get_post_renderer),
):
    controller = BlogPageController(
        PageDocument.from_template(BlogPageController.TEMPLATE), repo, renderer
    )
    await controller.initialize(category=category, search_term=q, page_url=str(request.url))
    return HTMLResponse(controller.document.render())


@router.get("/post.html", response_class=HTMLResponse)
async def post_page(
    request: Request,
    id: Optional[str] = None,
    repo=Depends(deps.get_posts_repo),
    renderer=Depends(deps.get_post_renderer),
):
    # Errors are rendered into the page itself, like a static page would
    controller = PostPageController(
        PageDocument.from_template(PostPageController.TEMPLATE),
        repo,
        renderer,
        renderer.metadata,
    )
    await controller.initialize(id, page_url=str(request.url))
    return HTMLResponse(controller.document.render())


@router.websocket("/ws/search")
async def live_search(
    websocket: WebSocket,
    category: str = ALL_CATEGORIES,
    repo=Depends(deps.get_posts_repo),
    renderer=Depends(deps.get_post_renderer),
):
    """
    Search-as-you-type for the blog page.

    The client sends ``{"q": ...}`` on every keystroke; the controller
    debounces them and only the settled term is answered with the new grid.
    """
    await websocket.accept()
    controller = BlogPageController(
        PageDocument.from_template(BlogPageController.TEMPLATE), repo, renderer
    )
    await controller.initialize(category=category)
    if not controller.loaded:
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return

    async def push(posts):
        await websocket.send_json(
            {"q": controller.search_term, "count": len(posts), "html": controller.grid_html()}
        )

    controller.on_results = push
    try:
        while True:
            message = await websocket.receive_json()
            controller.search_input(str(message.get("q", "")))
    except WebSocketDisconnect:
        logger.debug("Live search client disconnected")
    finally:
        controller.close()
