import logging

from folio.schemas.blog import PageMetadata, Post
from folio.settings import settings

logger = logging.getLogger(__name__)

# Slots that only exist while the current post has a cover image
IMAGE_SLOTS = (("property", "og:image"), ("name", "twitter:image"))


class MetadataInjector:
    """
    Writes page-level metadata for a post.

    Every call owns all of its slots: present fields are upserted and the
    image slots are removed when the post has no cover, so a second call
    never leaves metadata from the first behind.
    """

    def __init__(
        self,
        site_name: str = settings.SITE_NAME,
        default_description: str = settings.DEFAULT_DESCRIPTION,
    ):
        self.site_name = site_name
        self.default_description = default_description

    def build(self, post: Post, url: str) -> PageMetadata:
        return PageMetadata(
            title=post.seoTitle or f"{post.title} | {self.site_name}",
            description=post.seoDescription or post.excerpt or self.default_description,
            url=url,
            site_name=self.site_name,
            image=post.image or None,
        )

    def apply(self, document, post: Post, url: str) -> PageMetadata:
        metadata = self.build(post, url)
        document.title = metadata.title
        for field in metadata.to_meta_fields():
            document.upsert_meta(field.attr, field.key, field.content)
        if not metadata.image:
            for attr, key in IMAGE_SLOTS:
                if document.remove_meta(attr, key):
                    logger.debug(f"Cleared stale {key} for post {post.id}")
        document.set_canonical(url)
        return metadata
