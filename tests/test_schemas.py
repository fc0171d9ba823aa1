"""Tests for Pydantic schemas."""

import pytest
from pydantic import ValidationError

from schemas.batch import BatchItemResult, BatchOutcome
from schemas.document import CachedDocument
from schemas.fetch import FetchResult
from schemas.quota import QuotaLedger


class TestCachedDocument:
    """Tests for CachedDocument."""

    def test_comment_id_optional(self):
        document = CachedDocument(
            account_id="42",
            source_key="src",
            article_url="https://mp.weixin.qq.com/s/a",
            title="Title",
            local_path="/data/Title.html",
            byte_size=10,
        )

        assert document.comment_id is None

    def test_round_trip_json(self):
        document = CachedDocument(
            account_id="42",
            source_key="src",
            article_url="https://mp.weixin.qq.com/s/a",
            title="标题",
            comment_id="123",
            local_path="/data/x.html",
            byte_size=10,
        )

        assert CachedDocument.model_validate_json(document.model_dump_json()) == document

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            CachedDocument(account_id="42", source_key="src", title="t")


class TestFetchResult:
    """Tests for FetchResult."""

    def test_defaults(self):
        result = FetchResult(title="t", local_path="/x.html", byte_size=1)

        assert result.comment_id is None
        assert result.harvested_count == 0
        assert result.failed_resource_urls == []
        assert result.from_cache is False


class TestQuotaLedger:
    """Tests for QuotaLedger."""

    def test_remaining_bytes(self):
        assert QuotaLedger(account_id="1", capacity_bytes=100, used_bytes=30).remaining_bytes == 70

    def test_remaining_never_negative(self):
        assert QuotaLedger(account_id="1", capacity_bytes=100, used_bytes=130).remaining_bytes == 0


class TestBatchOutcome:
    """Tests for BatchOutcome."""

    def test_from_results_counts(self):
        results = [
            BatchItemResult(url="a", status="completed", title="A"),
            BatchItemResult(url="b", status="skipped"),
            BatchItemResult(url="c", status="failed", error="Resource not found"),
            BatchItemResult(url="d", status="completed", title="D"),
        ]

        outcome = BatchOutcome.from_results(results)

        assert outcome.total == 4
        assert outcome.completed_count == 2
        assert outcome.skipped_count == 1
        assert outcome.failed_count == 1
        assert outcome.session_expired is False

    def test_from_results_session_expired(self):
        outcome = BatchOutcome.from_results([], session_expired=True)

        assert outcome.total == 0
        assert outcome.session_expired is True

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            BatchItemResult(url="a", status="pending")
