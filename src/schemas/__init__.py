"""Schema definitions for feed-mirror."""

from .batch import BatchItemResult, BatchOutcome, ItemStatus
from .document import CachedDocument, ResourceMap
from .fetch import FetchResult
from .quota import QuotaLedger
from .resource import CachedResource

__all__ = [
    "BatchItemResult",
    "BatchOutcome",
    "CachedDocument",
    "CachedResource",
    "FetchResult",
    "ItemStatus",
    "QuotaLedger",
    "ResourceMap",
]
