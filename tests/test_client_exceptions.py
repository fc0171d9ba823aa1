"""Tests for client and storage exception classes."""

import pytest

from feed_mirror.clients import (
    ClientError,
    HttpStatusError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SessionExpiredError,
    is_session_expired,
)
from feed_mirror.storage import QuotaExceededError, StorageError


class TestClientErrors:
    """Tests for the client exception hierarchy."""

    def test_client_error_message(self):
        error = ClientError("Something went wrong")

        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_network_error_is_client_error(self):
        assert isinstance(NetworkError("down"), ClientError)

    def test_http_status_error_status_code(self):
        error = HttpStatusError("HTTP 502", status_code=502)

        assert error.status_code == 502
        assert isinstance(error, ClientError)

    def test_not_found_defaults(self):
        error = NotFoundError()

        assert error.status_code == 404
        assert error.message == "Resource not found"
        assert isinstance(error, HttpStatusError)

    def test_rate_limit_defaults(self):
        error = RateLimitError()

        assert error.status_code == 429
        assert isinstance(error, HttpStatusError)

    def test_session_expired_reserved_message(self):
        assert SessionExpiredError().message == "session_expired"

    def test_can_catch_all_with_base(self):
        with pytest.raises(ClientError):
            raise NotFoundError()


class TestIsSessionExpired:
    """Tests for is_session_expired()."""

    def test_dedicated_type(self):
        assert is_session_expired(SessionExpiredError())

    def test_reserved_message(self):
        """Any error carrying the reserved message counts."""
        assert is_session_expired(ClientError("session_expired"))
        assert is_session_expired(StorageError("session_expired"))

    def test_other_errors(self):
        assert not is_session_expired(NetworkError("down"))
        assert not is_session_expired(QuotaExceededError())
        assert not is_session_expired(ValueError("session_expired"))


class TestStorageErrors:
    """Tests for the storage exception hierarchy."""

    def test_quota_exceeded_message(self):
        error = QuotaExceededError()

        assert error.message == "storage_quota_exceeded"
        assert isinstance(error, StorageError)
