"""Storage collaborators: content records, quota and blob storage."""

from .blob_writer import FileBlobWriter
from .content_store import JsonContentStore
from .exceptions import QUOTA_EXCEEDED_REASON, QuotaExceededError, StorageError
from .interfaces import BlobWriter, ContentStore, QuotaGate
from .quota_ledger import DEFAULT_CAPACITY_BYTES, JsonQuotaLedger

__all__ = [
    "BlobWriter",
    "ContentStore",
    "QuotaGate",
    "FileBlobWriter",
    "JsonContentStore",
    "JsonQuotaLedger",
    "DEFAULT_CAPACITY_BYTES",
    "StorageError",
    "QuotaExceededError",
    "QUOTA_EXCEEDED_REASON",
]
