from typing import Optional


class FolioError(Exception):
    """Base error for the blog content pipeline.

    ``user_message`` is the friendly text shown in place of the content; the
    underlying ``cause`` only goes to the logs.
    """

    user_message = "Something went wrong"

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(detail)
        self.detail = detail
        self.cause = cause


class LoadError(FolioError):
    """The post index could not be fetched or parsed."""

    user_message = "Unable to load posts at this time."


class ContentLoadError(FolioError):
    """A post body could not be fetched."""

    user_message = "Unable to load post content"


class NotFoundError(FolioError):
    """No post id was given, the index is empty, or nothing matched."""

    user_message = "Post not found"

    MISSING_ID = "missing-id"
    EMPTY_INDEX = "empty-index"
    NO_MATCH = "no-match"

    def __init__(self, reason: str, post_id: Optional[str] = None):
        super().__init__(f"{reason}: {post_id!r}")
        self.reason = reason
        self.post_id = post_id
