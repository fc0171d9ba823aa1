"""Cached document and resource map schemas.

A cached document is the stored copy of one remote article. It is written
once per (account, article URL) and never mutated afterwards.

Directory structure:
    uploads/
    └── {account_id}/
        └── {source_key}/
            ├── html/
            │   └── {encoded_title}.html
            └── resources/
                └── {hash16}.{ext}
"""

from pydantic import BaseModel


class CachedDocument(BaseModel):
    """A previously fetched and stored article.

    Attributes:
        account_id: Account that owns the stored copy
        source_key: Upstream source account the article belongs to
        article_url: Canonical remote URL of the article
        title: Extracted article title
        comment_id: Embedded comment-thread identifier, if present
        local_path: Path of the stored document file
        byte_size: Size of the stored document in bytes
    """

    account_id: str
    source_key: str
    article_url: str
    title: str
    comment_id: str | None = None
    local_path: str
    byte_size: int


class ResourceMap(BaseModel):
    """Original-to-local mapping of the resources rewritten in one article.

    Attributes:
        account_id: Account that owns the stored copy
        source_key: Upstream source account the article belongs to
        article_url: Canonical remote URL of the article
        mapping: Source URL -> relative path used in the rewritten document
    """

    account_id: str
    source_key: str
    article_url: str
    mapping: dict[str, str] = {}
