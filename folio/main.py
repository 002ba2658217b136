import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from folio.routers import pages, posts
from folio.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = httpx.AsyncClient(
        base_url=settings.STATIC_BASE_URL,
        timeout=settings.fetch_timeout,
    )
    logger.info(f"Serving static resources from {settings.STATIC_BASE_URL}")

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("Static resource client closed")


app = FastAPI(title="Folio", description="Portfolio blog content pipeline", lifespan=lifespan)

app.include_router(pages.router)
app.include_router(posts.router)


@app.get("/")
async def root():
    return {"message": "Folio is running"}
