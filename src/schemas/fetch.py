"""Single-article fetch result schema."""

from pydantic import BaseModel


class FetchResult(BaseModel):
    """Outcome of fetching one article.

    Attributes:
        title: Extracted (or cached) article title
        comment_id: Embedded comment-thread identifier, if present
        local_path: Path of the stored document file
        byte_size: Size of the stored document in bytes
        harvested_count: Number of resources rewritten to local copies
            (0 when the article came from the cache)
        failed_resource_urls: Resource URLs that could not be fetched
        from_cache: True when no network work was done
    """

    title: str
    comment_id: str | None = None
    local_path: str
    byte_size: int
    harvested_count: int = 0
    failed_resource_urls: list[str] = []
    from_cache: bool = False
