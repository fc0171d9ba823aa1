"""Batch download scheduling.

Runs many article fetches through a fixed-size worker pool with paced
request starts. An upstream session expiry stops all further work in the
batch: queued items are not started, and items still in flight when the
expiry is seen are reported as failed even if their own fetch succeeded.
"""

import asyncio
import logging

from feed_mirror.clients import SESSION_EXPIRED_REASON, ClientError, is_session_expired
from feed_mirror.storage import ContentStore, StorageError
from schemas.batch import BatchItemResult, BatchOutcome

from .article_fetcher import ArticleFetcher

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 2
MAX_CONCURRENCY = 3
PACING_DELAY = 0.5


def clamp_concurrency(concurrency: int | None) -> int:
    """Clamp a requested concurrency to [1, MAX_CONCURRENCY].

    Examples:
        >>> clamp_concurrency(10)
        3
        >>> clamp_concurrency(-1)
        1
    """
    if concurrency is None:
        concurrency = DEFAULT_CONCURRENCY
    return min(max(1, concurrency), MAX_CONCURRENCY)


class _Pacer:
    """Enforces a minimum interval between the starts of successive fetches."""

    def __init__(self, interval: float):
        self._interval = interval
        self._lock = asyncio.Lock()
        self._next_start: float | None = None

    async def wait(self) -> None:
        async with self._lock:
            loop = asyncio.get_running_loop()
            if self._next_start is not None:
                delay = self._next_start - loop.time()
                if delay > 0:
                    await asyncio.sleep(delay)
            self._next_start = loop.time() + self._interval


class _BatchState:
    """Mutable state shared by the workers of one batch run."""

    def __init__(self) -> None:
        self.results: list[BatchItemResult] = []
        self.session_expired = asyncio.Event()

    def record(self, result: BatchItemResult) -> None:
        self.results.append(result)

    def record_expired(self, url: str) -> None:
        self.results.append(
            BatchItemResult(url=url, status="failed", error=SESSION_EXPIRED_REASON)
        )


class BatchScheduler:
    """Downloads a list of articles with bounded concurrency.

    Attributes:
        fetcher: Fetcher used for each article
        content_store: Store queried once per batch for already-cached URLs
        pacing_delay: Minimum seconds between the starts of two fetches

    Example:
        scheduler = BatchScheduler(fetcher, store)
        outcome = await scheduler.run_batch("42", "MzA3", urls, concurrency=2)
    """

    def __init__(
        self,
        fetcher: ArticleFetcher,
        content_store: ContentStore,
        pacing_delay: float = PACING_DELAY,
    ):
        self.fetcher = fetcher
        self.content_store = content_store
        self.pacing_delay = pacing_delay

    async def run_batch(
        self,
        account_id: str,
        source_key: str,
        urls: list[str],
        concurrency: int | None = DEFAULT_CONCURRENCY,
    ) -> BatchOutcome:
        """Download a batch of articles.

        Args:
            account_id: Account the copies are stored for
            source_key: Upstream source account the articles belong to
            urls: Article URLs; each appears exactly once in the outcome
            concurrency: Requested number of parallel fetches, clamped to [1, 3]

        Returns:
            BatchOutcome accounting for every input URL
        """
        workers_count = clamp_concurrency(concurrency)
        cached_urls = set(self.content_store.list_cached_urls(account_id, source_key))

        state = _BatchState()
        queue: asyncio.Queue[str] = asyncio.Queue()

        for url in urls:
            if url in cached_urls:
                state.record(BatchItemResult(url=url, status="skipped"))
            else:
                queue.put_nowait(url)

        logger.info(
            f"Starting batch for account {account_id}: {len(urls)} articles, "
            f"{queue.qsize()} to fetch, concurrency {workers_count}"
        )

        pacer = _Pacer(self.pacing_delay)
        workers = [
            asyncio.create_task(
                self._worker(account_id, source_key, queue, pacer, state)
            )
            for _ in range(min(workers_count, queue.qsize()))
        ]

        try:
            await asyncio.gather(*workers)
        except BaseException:
            for worker in workers:
                worker.cancel()
            raise

        outcome = BatchOutcome.from_results(
            state.results,
            session_expired=state.session_expired.is_set(),
        )

        logger.info(
            f"Batch finished: {outcome.completed_count} completed, "
            f"{outcome.failed_count} failed, {outcome.skipped_count} skipped"
        )
        if outcome.session_expired:
            logger.warning("Batch stopped early: upstream session expired")

        return outcome

    async def _worker(
        self,
        account_id: str,
        source_key: str,
        queue: asyncio.Queue[str],
        pacer: _Pacer,
        state: _BatchState,
    ) -> None:
        """Take URLs from the queue until it is empty."""
        while True:
            try:
                url = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            if state.session_expired.is_set():
                state.record_expired(url)
                continue

            await pacer.wait()

            # Expiry may have been seen while waiting for a start slot
            if state.session_expired.is_set():
                state.record_expired(url)
                continue

            await self._process(account_id, source_key, url, state)

    async def _process(
        self,
        account_id: str,
        source_key: str,
        url: str,
        state: _BatchState,
    ) -> None:
        """Fetch one article and record its result."""
        try:
            result = await self.fetcher.fetch_article(account_id, source_key, url)
        except (ClientError, StorageError) as e:
            if is_session_expired(e):
                state.session_expired.set()
                state.record_expired(url)
                logger.warning(f"Session expired while fetching {url}")
                return
            logger.warning(f"Failed to fetch {url}: {e.message}")
            state.record(BatchItemResult(url=url, status="failed", error=e.message))
            return

        if state.session_expired.is_set():
            state.record_expired(url)
            return

        state.record(BatchItemResult(url=url, status="completed", title=result.title))
