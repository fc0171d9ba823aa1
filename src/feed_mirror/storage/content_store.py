"""JSON-file-backed content store."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel

from schemas.document import CachedDocument, ResourceMap
from schemas.resource import CachedResource

from .interfaces import ContentStore

logger = logging.getLogger(__name__)


class AccountIndex(BaseModel):
    """Everything cached for one account, keyed by remote URL."""

    documents: dict[str, CachedDocument] = {}
    resources: dict[str, CachedResource] = {}
    resource_maps: dict[str, ResourceMap] = {}


class JsonContentStore(ContentStore):
    """Content store keeping one JSON index file per account.

    Indexes live at ``{root}/index/{account_id}.json`` and are loaded
    lazily, then kept in memory and rewritten after every save. A second
    document for the same article URL is rejected, which gives the
    at-most-one-document-per-URL guarantee.

    Example:
        store = JsonContentStore(Path("./data"))
        if store.get_cached_document("42", url) is None:
            ...
    """

    def __init__(self, root: Path):
        self.root = root
        self._indexes: dict[str, AccountIndex] = {}

    def get_cached_document(self, account_id: str, url: str) -> CachedDocument | None:
        return self._index(account_id).documents.get(url)

    def save_cached_document(self, account_id: str, document: CachedDocument) -> bool:
        index = self._index(account_id)
        if document.article_url in index.documents:
            logger.debug(f"Document already cached for {document.article_url}")
            return False
        index.documents[document.article_url] = document
        self._flush(account_id)
        return True

    def get_cached_resource(self, account_id: str, url: str) -> CachedResource | None:
        return self._index(account_id).resources.get(url)

    def save_cached_resource(self, account_id: str, resource: CachedResource) -> None:
        self._index(account_id).resources[resource.source_url] = resource
        self._flush(account_id)

    def save_resource_map(self, account_id: str, resource_map: ResourceMap) -> None:
        self._index(account_id).resource_maps[resource_map.article_url] = resource_map
        self._flush(account_id)

    def get_resource_map(self, account_id: str, url: str) -> ResourceMap | None:
        """Return the resource map saved for an article URL, if any."""
        return self._index(account_id).resource_maps.get(url)

    def list_cached_urls(self, account_id: str, source_key: str) -> list[str]:
        return [
            url
            for url, document in self._index(account_id).documents.items()
            if document.source_key == source_key
        ]

    def _index_path(self, account_id: str) -> Path:
        return self.root / "index" / f"{account_id}.json"

    def _index(self, account_id: str) -> AccountIndex:
        """Get the account's index, loading it from disk on first use."""
        index = self._indexes.get(account_id)
        if index is None:
            path = self._index_path(account_id)
            if path.exists():
                index = AccountIndex.model_validate(json.loads(path.read_text()))
            else:
                index = AccountIndex()
            self._indexes[account_id] = index
        return index

    def _flush(self, account_id: str) -> None:
        path = self._index_path(account_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self._indexes[account_id].model_dump_json(indent=2))
