"""Async base client with retries for upstream requests."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from .exceptions import (
    HttpStatusError,
    NetworkError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class Client(ABC):
    """Base class for async upstream clients.

    Wraps a lazily created httpx.AsyncClient and retries requests that fail
    at the transport level. Usable as an async context manager.

    Config keys:
        timeout: Request timeout in seconds (default: 30)
        retry_attempts: Number of attempts for transport failures (default: 3)
        retry_delay: Delay between attempts in seconds (default: 1)
        headers: Additional headers to include in requests
        follow_redirects: Whether redirects are followed (default: True)
    """

    def __init__(self, config: dict | None = None, http_client: httpx.AsyncClient | None = None):
        """Initialize the client.

        Args:
            config: Client configuration (see class docstring)
            http_client: Optional HTTP client for dependency injection.
                         If not provided, one will be created lazily.
        """
        self._config = dict(config or {})
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def retry_attempts(self) -> int:
        return max(int(self._config.get("retry_attempts", 3)), 1)

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def follow_redirects(self) -> bool:
        return bool(self._config.get("follow_redirects", True))

    @property
    def client(self) -> httpx.AsyncClient:
        """HTTP client, created on first use unless one was injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=self.follow_redirects,
            )
        return self._client

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    async def aclose(self) -> None:
        """Close the underlying HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Raise the matching ClientError for a non-2xx response.

        Args:
            response: The HTTP response to check

        Returns:
            The response if successful

        Raises:
            NotFoundError: For 404 responses
            RateLimitError: For 429 responses
            HttpStatusError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code

        if status_code == 404:
            raise NotFoundError(f"Resource not found: {response.url}")
        elif status_code == 429:
            raise RateLimitError(f"Rate limit exceeded: {response.url}")
        else:
            raise HttpStatusError(
                f"HTTP {status_code}: {response.url}",
                status_code=status_code,
            )

    async def _request(
        self,
        method: str,
        url: str,
        **kwargs,
    ) -> httpx.Response:
        """Make a request with retry logic for transport failures.

        HTTP error statuses are not retried.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute URL to request
            **kwargs: Additional arguments passed to httpx.AsyncClient.request

        Returns:
            The HTTP response

        Raises:
            NetworkError: If all retry attempts fail due to transport issues,
                or the request fails in a way retrying cannot fix
            HttpStatusError: If the upstream returns a non-2xx response
        """
        last_exception: Exception | None = None

        for attempt in range(self.retry_attempts):
            try:
                response = await self.client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                last_exception = e
                logger.warning(
                    f"Transport error for {url} "
                    f"(attempt {attempt + 1}/{self.retry_attempts}): {e!r}"
                )
                if attempt < self.retry_attempts - 1:
                    await asyncio.sleep(self.retry_delay)
                continue
            except httpx.HTTPError as e:
                # Redirect loops and undecodable bodies fail the same way on every attempt
                logger.warning(f"Request error for {url}: {e!r}")
                raise NetworkError(f"Request to {url} failed: {e}") from e
            return self._handle_response(response)

        msg = f"Request to {url} failed after {self.retry_attempts} attempts"
        raise NetworkError(msg) from last_exception

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """Send a GET request with retries.

        Args:
            url: Absolute URL to request
            **kwargs: Additional arguments passed to httpx.AsyncClient.request

        Returns:
            The HTTP response
        """
        return await self._request("GET", url, **kwargs)

    @abstractmethod
    async def fetch(self, *args, **kwargs) -> Any:
        """Fetch data from the upstream. Must be implemented by subclasses."""
        pass
