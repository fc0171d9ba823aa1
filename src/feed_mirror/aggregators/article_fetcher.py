"""Single-article fetch pipeline.

Cache check -> quota check -> document fetch -> title/comment id
extraction -> resource harvesting -> rewrite -> persistence -> quota update.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from feed_mirror.clients import ArticleClient, ClientError
from feed_mirror.extractors import (
    CDN_HOSTS,
    allocate_resource_name,
    extract_comment_id,
    extract_resource_urls,
    extract_title,
    safe_document_name,
)
from feed_mirror.storage import BlobWriter, ContentStore, QuotaExceededError, QuotaGate
from feed_mirror.transformers import rewrite_document
from schemas.document import CachedDocument, ResourceMap
from schemas.fetch import FetchResult
from schemas.resource import CachedResource

logger = logging.getLogger(__name__)

# Stand-in for "typical article + images" before the real size is known
ESTIMATED_ARTICLE_BYTES = 2 * 1024 * 1024


class _KeyedLocks:
    """One asyncio.Lock per key, dropped once no task holds or awaits it."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], tuple[asyncio.Lock, list[int]]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @asynccontextmanager
    async def hold(self, key: tuple[str, str]):
        lock, users = self._entries.setdefault(key, (asyncio.Lock(), [0]))
        users[0] += 1
        try:
            async with lock:
                yield
        finally:
            users[0] -= 1
            if users[0] == 0:
                del self._entries[key]


class ArticleFetcher:
    """Fetches one article and mirrors it, with its CDN images, into local storage.

    Repeated calls for the same (account, article URL) are served from the
    content store without network access. Images already cached for the
    account are reused; images that fail to download are reported but do
    not fail the article.

    Example:
        async with ArticleClient() as client:
            fetcher = ArticleFetcher(client, store, quota, blobs)
            result = await fetcher.fetch_article("42", "MzA3", url)
    """

    def __init__(
        self,
        client: ArticleClient,
        content_store: ContentStore,
        quota_gate: QuotaGate,
        blob_writer: BlobWriter,
        estimated_bytes: int = ESTIMATED_ARTICLE_BYTES,
        allowed_hosts: tuple[str, ...] = CDN_HOSTS,
    ):
        """Initialize the fetcher.

        Args:
            client: Client used for documents and resources
            content_store: Records of cached documents and resources
            quota_gate: Per-account storage quota
            blob_writer: Byte storage for documents and resources
            estimated_bytes: Footprint checked against the quota before fetching
            allowed_hosts: CDN hosts whose images are harvested
        """
        self.client = client
        self.content_store = content_store
        self.quota_gate = quota_gate
        self.blob_writer = blob_writer
        self.estimated_bytes = estimated_bytes
        self.allowed_hosts = allowed_hosts
        self._resource_locks = _KeyedLocks()

    async def fetch_article(
        self,
        account_id: str,
        source_key: str,
        article_url: str,
    ) -> FetchResult:
        """Fetch, rewrite and store one article.

        Args:
            account_id: Account the copy is stored for
            source_key: Upstream source account the article belongs to
            article_url: Canonical article URL

        Returns:
            FetchResult describing the stored document

        Raises:
            QuotaExceededError: If the estimated footprint does not fit
            SessionExpiredError: If the upstream reports an expired session
            HttpStatusError: If the document request returns a non-2xx status
            NetworkError: If the document request fails at the transport level
        """
        cached = self.content_store.get_cached_document(account_id, article_url)
        if cached is not None:
            logger.debug(f"Cache hit for {article_url}")
            return self._cached_result(cached)

        if not self.quota_gate.would_fit(account_id, self.estimated_bytes):
            logger.warning(f"Storage quota exceeded for account {account_id}")
            raise QuotaExceededError()

        body = await self.client.fetch(article_url)

        title = extract_title(body)
        comment_id = extract_comment_id(body)

        html_dir = self.blob_writer.upload_path(account_id, source_key, "html")
        mapping, failed_urls, resource_bytes = await self._harvest_resources(
            account_id, source_key, body, html_dir
        )

        if mapping:
            body = rewrite_document(body, mapping)

        html_path = html_dir / f"{safe_document_name(title)}.html"
        html_size = self.blob_writer.write(html_path, body.encode("utf-8"))

        document = CachedDocument(
            account_id=account_id,
            source_key=source_key,
            article_url=article_url,
            title=title,
            comment_id=comment_id,
            local_path=str(html_path),
            byte_size=html_size,
        )

        if not self.content_store.save_cached_document(account_id, document):
            existing = self.content_store.get_cached_document(account_id, article_url)
            if existing is not None:
                # Another run stored this article first; its record is authoritative
                logger.info(f"Article {article_url} was stored concurrently, using existing copy")
                if resource_bytes:
                    self.quota_gate.record_usage(account_id, resource_bytes)
                return self._cached_result(existing)

        if mapping:
            self.content_store.save_resource_map(
                account_id,
                ResourceMap(
                    account_id=account_id,
                    source_key=source_key,
                    article_url=article_url,
                    mapping=mapping,
                ),
            )

        self.quota_gate.record_usage(account_id, html_size + resource_bytes)

        logger.info(
            f"Saved article '{title}' ({html_size} bytes, "
            f"{len(mapping)} images, {len(failed_urls)} failed)"
        )

        return FetchResult(
            title=title,
            comment_id=comment_id,
            local_path=str(html_path),
            byte_size=html_size,
            harvested_count=len(mapping),
            failed_resource_urls=failed_urls,
        )

    def _cached_result(self, document: CachedDocument) -> FetchResult:
        return FetchResult(
            title=document.title,
            comment_id=document.comment_id,
            local_path=document.local_path,
            byte_size=document.byte_size,
            harvested_count=0,
            failed_resource_urls=[],
            from_cache=True,
        )

    async def _harvest_resources(
        self,
        account_id: str,
        source_key: str,
        body: str,
        html_dir: Path,
    ) -> tuple[dict[str, str], list[str], int]:
        """Store every harvestable resource referenced by a document.

        Args:
            account_id: Account the copies are stored for
            source_key: Upstream source account
            body: Document HTML
            html_dir: Directory the document will be written to; links in
                the mapping are relative to it

        Returns:
            Tuple of (source URL -> relative link mapping, failed URLs,
            bytes written for newly fetched resources)
        """
        mapping: dict[str, str] = {}
        failed_urls: list[str] = []
        new_bytes = 0

        for url in sorted(extract_resource_urls(body, self.allowed_hosts)):
            try:
                local_path, fetched_bytes = await self._store_resource(
                    account_id, source_key, url
                )
            except ClientError as e:
                logger.warning(f"Failed to download resource {url}: {e.message}")
                failed_urls.append(url)
                continue

            mapping[url] = Path(os.path.relpath(local_path, html_dir)).as_posix()
            new_bytes += fetched_bytes

        return mapping, failed_urls, new_bytes

    async def _store_resource(
        self,
        account_id: str,
        source_key: str,
        url: str,
    ) -> tuple[Path, int]:
        """Return the local path of a resource, downloading it if not cached.

        Returns:
            Tuple of (local path, bytes written; 0 when reused)

        Raises:
            ClientError: If the download fails
        """
        async with self._resource_locks.hold((account_id, url)):
            existing = self.content_store.get_cached_resource(account_id, url)
            if existing is not None and self.blob_writer.exists(Path(existing.local_path)):
                logger.debug(f"Reusing cached resource {url}")
                return Path(existing.local_path), 0

            content, content_type = await self.client.fetch_resource(url)

            resource_dir = self.blob_writer.upload_path(account_id, source_key, "resources")
            local_path = resource_dir / allocate_resource_name(url, content_type)
            size = self.blob_writer.write(local_path, content)

            self.content_store.save_cached_resource(
                account_id,
                CachedResource(
                    account_id=account_id,
                    source_key=source_key,
                    source_url=url,
                    local_path=str(local_path),
                    byte_size=size,
                    mime_type=content_type,
                ),
            )
            logger.debug(f"Downloaded resource {url} -> {local_path.name}")
            return local_path, size
