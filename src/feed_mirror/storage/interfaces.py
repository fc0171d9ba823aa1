"""Collaborator interfaces consumed by the article fetcher and batch scheduler.

- ContentStore: records of cached documents, resources and resource maps
- QuotaGate: per-account storage quota checks and usage accounting
- BlobWriter: raw byte storage for documents and resources
"""

from abc import ABC, abstractmethod
from pathlib import Path

from schemas.document import CachedDocument, ResourceMap
from schemas.resource import CachedResource


class ContentStore(ABC):
    """Abstract source of truth for what has already been downloaded."""

    @abstractmethod
    def get_cached_document(self, account_id: str, url: str) -> CachedDocument | None:
        """Return the cached document for an article URL, if any."""
        pass

    @abstractmethod
    def save_cached_document(self, account_id: str, document: CachedDocument) -> bool:
        """Persist a cached document.

        At most one document may exist per (account_id, article_url).

        Returns:
            True if the document was stored, False if one already existed
        """
        pass

    @abstractmethod
    def get_cached_resource(self, account_id: str, url: str) -> CachedResource | None:
        """Return the cached resource for a source URL, if any."""
        pass

    @abstractmethod
    def save_cached_resource(self, account_id: str, resource: CachedResource) -> None:
        """Persist a cached resource, replacing any record for the same URL."""
        pass

    @abstractmethod
    def save_resource_map(self, account_id: str, resource_map: ResourceMap) -> None:
        """Persist the resource map of an article."""
        pass

    @abstractmethod
    def list_cached_urls(self, account_id: str, source_key: str) -> list[str]:
        """Return the article URLs already cached for a source account."""
        pass


class QuotaGate(ABC):
    """Abstract per-account storage quota."""

    @abstractmethod
    def would_fit(self, account_id: str, additional_bytes: int) -> bool:
        """Return True if storing additional_bytes more stays within quota."""
        pass

    @abstractmethod
    def record_usage(self, account_id: str, delta_bytes: int) -> None:
        """Add delta_bytes to the account's recorded usage."""
        pass


class BlobWriter(ABC):
    """Abstract raw byte storage."""

    @abstractmethod
    def write(self, path: Path, data: bytes) -> int:
        """Write data to path and return the stored size in bytes."""
        pass

    @abstractmethod
    def read(self, path: Path) -> bytes:
        """Read the bytes stored at path."""
        pass

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return True if something is stored at path."""
        pass

    @abstractmethod
    def upload_path(self, account_id: str, source_key: str, kind: str) -> Path:
        """Return the directory for an account's html or resources files."""
        pass
