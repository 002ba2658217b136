import json
import textwrap

import httpx

from folio.errors import LoadError
from folio.schemas.blog import Post

SAMPLE_INDEX = [
    {
        "id": "a1",
        "title": "SQL Injection 101",
        "excerpt": "Understanding classic injection flaws",
        "categories": ["Web Security"],
        "tags": ["owasp", "databases"],
        "date": "2024-01-05",
        "image": "images/sqli.png",
        "contentPath": "posts/2024/sqli.md",
        "seoTitle": "SQLi explained",
    },
    {
        "id": "a2",
        "title": "Firewalls",
        "excerpt": "Packet filtering basics",
        "categories": ["Network"],
        "date": "2024-02-01",
        "contentFile": "firewalls.md",
    },
    {
        "id": "a3",
        "title": "Threat Modeling",
        "excerpt": "",
        "categories": ["Web  Security", "Process"],
        "tags": ["STRIDE"],
        "date": "2024-03-10",
        "contentFile": "threat-modeling.md",
    },
]


def sample_posts() -> list[Post]:
    return [Post(**record) for record in SAMPLE_INDEX]


def dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


class FakeStaticClient:
    """
    Minimal static resource stand-in.
    Values are returned as-is; exception instances are raised.
    """

    def __init__(self, resources: dict):
        self.resources = resources
        self.calls = []

    def _lookup(self, path):
        self.calls.append(path)
        if path not in self.resources:
            request = httpx.Request("GET", f"http://static.test/{path}")
            response = httpx.Response(404, request=request)
            raise httpx.HTTPStatusError("404 Not Found", request=request, response=response)
        value = self.resources[path]
        if isinstance(value, Exception):
            raise value
        return value

    async def get_text(self, path: str) -> str:
        value = self._lookup(path)
        return value if isinstance(value, str) else json.dumps(value)

    async def get_json(self, path: str):
        value = self._lookup(path)
        return json.loads(value) if isinstance(value, str) else value


class FakeRepo:
    """Post repository stand-in; pass ``error`` to make load() fail."""

    def __init__(self, posts=None, error: Exception | None = None):
        self.posts = list(posts or [])
        self.error = error
        self.load_calls = 0

    async def load(self):
        self.load_calls += 1
        if self.error:
            raise self.error
        return self.posts


class FailingRepo(FakeRepo):
    def __init__(self):
        super().__init__(error=LoadError("index unavailable", cause=httpx.ConnectError("refused")))


def make_static_transport(resources: dict) -> httpx.MockTransport:
    """httpx transport serving ``resources`` by path; anything else is a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        if path not in resources:
            return httpx.Response(404, text="not found")
        value = resources[path]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, (list, dict)):
            return httpx.Response(200, json=value)
        return httpx.Response(200, text=value)

    return httpx.MockTransport(handler)
