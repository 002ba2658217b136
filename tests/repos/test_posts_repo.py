import asyncio
import logging

import httpx
import pytest

from folio.errors import LoadError
from folio.repos.posts_repo import StaticPostsRepo
from folio.services.post_renderer import PostRenderer
from tests.conftest import SAMPLE_INDEX, FakeStaticClient


def load(resources, index_path="data/posts.json"):
    repo = StaticPostsRepo(FakeStaticClient(resources), index_path=index_path)
    return repo, asyncio.run(repo.load())


def test_load_returns_posts_in_index_order():
    _, posts = load({"data/posts.json": SAMPLE_INDEX})

    assert [p.id for p in posts] == ["a1", "a2", "a3"]
    assert posts[1].tags == []
    assert posts[0].seoTitle == "SQLi explained"


def test_load_ignores_unknown_keys():
    _, posts = load({"data/posts.json": [{"id": "x", "title": "X", "readingTime": "3 min"}]})

    assert posts[0].id == "x"


def test_duplicate_ids_warn_and_first_wins(caplog):
    index = [{"id": "dup", "title": "First"}, {"id": "dup", "title": "Second"}]

    with caplog.at_level(logging.WARNING):
        _, posts = load({"data/posts.json": index})

    assert [p.title for p in posts] == ["First", "Second"]
    assert PostRenderer(None, None).find_post(posts, "dup").title == "First"
    assert "Duplicate post id" in caplog.text


def test_network_failure_raises_load_error():
    static = FakeStaticClient({"data/posts.json": httpx.ConnectError("refused")})

    with pytest.raises(LoadError) as excinfo:
        asyncio.run(StaticPostsRepo(static, index_path="data/posts.json").load())

    assert isinstance(excinfo.value.cause, httpx.ConnectError)


def test_missing_index_raises_load_error():
    with pytest.raises(LoadError):
        load({})


def test_malformed_json_raises_load_error():
    with pytest.raises(LoadError):
        load({"data/posts.json": "[{not json"})


def test_non_array_payload_raises_load_error():
    with pytest.raises(LoadError):
        load({"data/posts.json": {"posts": []}})


def test_invalid_record_raises_load_error():
    with pytest.raises(LoadError):
        load({"data/posts.json": [{"title": "no id"}]})


def test_each_load_fetches_once():
    static = FakeStaticClient({"data/posts.json": SAMPLE_INDEX})
    repo = StaticPostsRepo(static, index_path="data/posts.json")

    asyncio.run(repo.load())

    assert static.calls == ["data/posts.json"]
