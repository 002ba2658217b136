import httpx
from fastapi import Depends
from fastapi.requests import HTTPConnection

from folio.repos.posts_repo import StaticPostsRepo
from folio.services.markdown_pipeline import MarkdownContentPipeline
from folio.services.metadata_injector import MetadataInjector
from folio.services.post_renderer import PostRenderer
from folio.services.static_client import StaticResourceClient
from folio.settings import settings


def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    # HTTPConnection so page requests and the live-search socket share providers
    return connection.app.state.http_client


def get_static_client(client=Depends(get_http_client)):
    return StaticResourceClient(client)


def get_posts_repo(static=Depends(get_static_client)):
    # One repository per request: every page view loads the index afresh
    return StaticPostsRepo(static, index_path=settings.POSTS_INDEX_PATH)


def get_content_pipeline(static=Depends(get_static_client)):
    return MarkdownContentPipeline(static, content_dir=settings.POSTS_CONTENT_DIR)


def get_metadata_injector():
    return MetadataInjector(
        site_name=settings.SITE_NAME,
        default_description=settings.DEFAULT_DESCRIPTION,
    )


def get_post_renderer(
    pipeline=Depends(get_content_pipeline),
    metadata=Depends(get_metadata_injector),
):
    return PostRenderer(pipeline=pipeline, metadata=metadata)
