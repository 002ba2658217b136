import logging
import posixpath
import re
from dataclasses import dataclass

import frontmatter
import httpx
import markdown
from bs4 import BeautifulSoup

from folio.errors import ContentLoadError
from folio.schemas.blog import Post
from folio.settings import settings

logger = logging.getLogger(__name__)

# GitHub-flavoured rendering; nl2br turns single newlines into <br />
MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "nl2br"]

UNSAFE_TAGS = [
    "script", "iframe", "object", "embed", "style",
    "base", "meta", "link", "form",
]
URL_ATTRS = ("href", "src", "action", "formaction", "srcset", "xlink:href")
UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")
SAFE_DATA_PREFIX = "data:image/"

_SCHEME_OR_PROTOCOL_RELATIVE = re.compile(r"^(?:[a-z][a-z0-9+.\-]*:|//)", re.IGNORECASE)


@dataclass
class RenderedContent:
    content_path: str
    markdown: str
    html: str


def resolve_content_path(post: Post, content_dir: str = settings.POSTS_CONTENT_DIR) -> str:
    if post.contentPath:
        return post.contentPath
    if post.contentFile:
        return posixpath.join(content_dir, post.contentFile) if content_dir else post.contentFile
    raise ContentLoadError(f"Post {post.id!r} has neither contentPath nor contentFile")


def _strip_dot_slash(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path


def content_base_dir(content_path: str) -> str:
    """Directory holding the markdown file; relative images resolve against it."""
    head, sep, _ = _strip_dot_slash(content_path).rpartition("/")
    return head if sep else ""


def is_absolute_or_root_relative(src: str) -> bool:
    return bool(_SCHEME_OR_PROTOCOL_RELATIVE.match(src)) or src.startswith("/")


def rewrite_asset_path(src: str, base_dir: str) -> str:
    """
    Resolve an image path written relative to the markdown file.

    Absolute and root-relative URLs are returned unchanged, and a path already
    under ``base_dir`` is not prefixed again.
    """
    if not src or is_absolute_or_root_relative(src):
        return src
    normalized = _strip_dot_slash(src)
    base_dir = _strip_dot_slash(base_dir).rstrip("/")
    if not base_dir:
        return normalized
    prefix = base_dir + "/"
    if normalized.startswith(prefix):
        return normalized
    return prefix + normalized


def markdown_to_html(text: str) -> str:
    return markdown.markdown(
        text,
        extensions=MARKDOWN_EXTENSIONS,
        output_format="html",
    )


def strip_front_matter(text: str) -> str:
    if not text.startswith("---"):
        return text
    try:
        return frontmatter.loads(text).content
    except Exception as e:
        logger.warning(f"Ignoring unparseable front matter: {e}")
        return text


def is_unsafe_url(value: str) -> bool:
    # Browsers ignore whitespace and case inside the scheme
    compact = "".join(value.split()).lower()
    if compact.startswith(SAFE_DATA_PREFIX):
        return False
    return compact.startswith(UNSAFE_SCHEMES)


def _url_candidates(attr: str, value: str) -> list[str]:
    if attr != "srcset":
        return [value]
    return [candidate.strip() for candidate in value.split(",") if candidate.strip()]


def sanitize(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(UNSAFE_TAGS):
        tag.decompose()
    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            name = attr.lower()
            if name.startswith("on"):
                del tag[attr]
            elif name in URL_ATTRS:
                value = str(tag[attr])
                if any(is_unsafe_url(url) for url in _url_candidates(name, value)):
                    logger.debug(f"Dropping unsafe {name} on <{tag.name}>")
                    del tag[attr]


def rewrite_image_sources(soup: BeautifulSoup, base_dir: str) -> None:
    for img in soup.find_all("img"):
        src = img.get("src") or ""
        rewritten = rewrite_asset_path(src, base_dir)
        if rewritten != src:
            img["src"] = rewritten


def mark_zoomable(soup: BeautifulSoup) -> None:
    """Opt every body image into the shared lightbox overlay."""
    for img in soup.find_all("img"):
        if not img.has_attr("loading"):
            img["loading"] = "lazy"
        img["data-lightbox"] = ""
        style = img.get("style", "")
        if "cursor" not in style:
            img["style"] = f"{style.rstrip('; ')}; cursor: zoom-in" if style else "cursor: zoom-in"


class MarkdownContentPipeline:
    def __init__(self, static_client, content_dir: str = settings.POSTS_CONTENT_DIR):
        self.static = static_client
        self.content_dir = content_dir

    async def render(self, post: Post) -> str:
        rendered = await self.render_content(post)
        return rendered.html

    async def render_content(self, post: Post) -> RenderedContent:
        content_path = resolve_content_path(post, self.content_dir)
        try:
            raw = await self.static.get_text(content_path)
        except httpx.HTTPError as e:
            raise ContentLoadError(
                f"Failed to fetch {content_path} for post {post.id!r}: {e}", cause=e
            ) from e

        text = strip_front_matter(raw)
        html = self.transform(text, content_base_dir(content_path))
        logger.debug(f"Rendered {content_path} ({len(text)} chars markdown)")
        return RenderedContent(content_path=content_path, markdown=text, html=html)

    def transform(self, text: str, base_dir: str) -> str:
        soup = BeautifulSoup(markdown_to_html(text), "html.parser")
        sanitize(soup)
        rewrite_image_sources(soup, base_dir)
        mark_zoomable(soup)
        return str(soup)
