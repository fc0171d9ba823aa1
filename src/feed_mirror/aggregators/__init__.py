"""Article acquisition: single-article fetching and batch scheduling."""

from .article_fetcher import ESTIMATED_ARTICLE_BYTES, ArticleFetcher
from .batch_scheduler import (
    DEFAULT_CONCURRENCY,
    MAX_CONCURRENCY,
    PACING_DELAY,
    BatchScheduler,
    clamp_concurrency,
)

__all__ = [
    "ArticleFetcher",
    "BatchScheduler",
    "clamp_concurrency",
    "DEFAULT_CONCURRENCY",
    "ESTIMATED_ARTICLE_BYTES",
    "MAX_CONCURRENCY",
    "PACING_DELAY",
]
