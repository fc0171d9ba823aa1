"""Filesystem-backed blob storage."""

import logging
from pathlib import Path

from .interfaces import BlobWriter

logger = logging.getLogger(__name__)

BLOB_KINDS = ("html", "resources")


class FileBlobWriter(BlobWriter):
    """Stores documents and resources as plain files under a root directory.

    Layout: ``{root}/uploads/{account_id}/{source_key}/{html|resources}/``
    """

    def __init__(self, root: Path):
        self.root = root

    def upload_path(self, account_id: str, source_key: str, kind: str) -> Path:
        if kind not in BLOB_KINDS:
            raise ValueError(f"Unknown blob kind: {kind}")
        return self.root / "uploads" / str(account_id) / source_key / kind

    def write(self, path: Path, data: bytes) -> int:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        size = path.stat().st_size
        logger.debug(f"Wrote {size} bytes to {path}")
        return size

    def read(self, path: Path) -> bytes:
        return path.read_bytes()

    def exists(self, path: Path) -> bool:
        return path.is_file()
