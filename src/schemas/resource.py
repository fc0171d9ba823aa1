"""Cached resource schema."""

from pydantic import BaseModel


class CachedResource(BaseModel):
    """A harvested remote asset, typically an image.

    Keyed by (account_id, source_url). The local filename is derived from
    the source URL, so the same URL always maps to the same artifact.

    Attributes:
        account_id: Account that owns the stored copy
        source_key: Upstream source account the resource was first seen under
        source_url: Remote URL the resource was fetched from
        local_path: Path of the stored resource file
        byte_size: Size of the stored file in bytes
        mime_type: Content-Type reported by the CDN, if any
    """

    account_id: str
    source_key: str
    source_url: str
    local_path: str
    byte_size: int
    mime_type: str | None = None
