"""Batch download outcome schemas."""

from typing import Literal

from pydantic import BaseModel

ItemStatus = Literal["completed", "failed", "skipped"]


class BatchItemResult(BaseModel):
    """Per-URL entry of a batch outcome.

    Attributes:
        url: Input article URL
        status: completed, failed or skipped
        title: Article title for completed items
        error: Failure reason for failed items
    """

    url: str
    status: ItemStatus
    title: str | None = None
    error: str | None = None


class BatchOutcome(BaseModel):
    """Summary of one batch run. Not persisted.

    Every input URL appears in ``results`` exactly once, so
    ``total == completed_count + failed_count + skipped_count``.
    """

    total: int
    completed_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    session_expired: bool = False
    results: list[BatchItemResult] = []

    @classmethod
    def from_results(
        cls,
        results: list[BatchItemResult],
        session_expired: bool = False,
    ) -> "BatchOutcome":
        """Build an outcome with counts derived from the per-URL results."""
        return cls(
            total=len(results),
            completed_count=sum(1 for r in results if r.status == "completed"),
            failed_count=sum(1 for r in results if r.status == "failed"),
            skipped_count=sum(1 for r in results if r.status == "skipped"),
            session_expired=session_expired,
            results=list(results),
        )
