"""Base async HTTP client with rate limiting, retries and connection pooling.

The CompanyInfo client inherits from this base so that transport concerns
live in one place:
- Async/await for non-blocking I/O
- Connection pooling, sized for the screener's admission gate
- Token-bucket rate limiting to respect API quotas
- Retries with exponential backoff on transient failures
- Request timeouts

Nothing above this layer retries.

Usage:
    class MyAPIClient(BaseAsyncClient):
        def __init__(self, api_key: str, rate_limit: int = 10):
            super().__init__(
                base_url="https://api.example.com",
                params={"code": api_key},
                rate_limit=rate_limit,
            )

        async def get_data(self, symbol: str) -> dict:
            return await self.get(f"/data/{symbol}")
"""

import asyncio
import logging
from typing import Any

import httpx


logger = logging.getLogger(__name__)

# Transient statuses worth another attempt
_RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class RateLimiter:
    """Token bucket rate limiter for async operations.

    Args:
        rate: Maximum requests per second
    """

    def __init__(self, rate: int) -> None:
        self.rate = rate
        self.tokens = float(rate)
        self.updated_at: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Take one token, sleeping until one is available."""
        async with self._lock:
            loop = asyncio.get_running_loop()
            if self.updated_at is None:
                self.updated_at = loop.time()

            while True:
                now = loop.time()
                self.tokens = min(self.rate, self.tokens + (now - self.updated_at) * self.rate)
                self.updated_at = now
                if self.tokens >= 1:
                    break
                await asyncio.sleep((1 - self.tokens) / self.rate)

            self.tokens -= 1


class APIProviderError(Exception):
    """A provider request failed or returned an unusable payload."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class BaseAsyncClient:
    """Base async HTTP client with rate limiting and retries.

    Args:
        base_url: Base URL for all API requests
        headers: Default headers for all requests
        params: Query parameters sent with every request (e.g. API key)
        rate_limit: Maximum requests per second (default: 10)
        timeout: Request timeout in seconds (default: 30)
        max_retries: Extra attempts on transient failures (default: 6)
        backoff: First retry delay in seconds, doubled per attempt (default: 2)
        max_connections: Connection pool size (default: 20)
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        rate_limit: int = 10,
        timeout: float = 30.0,
        max_retries: int = 6,
        backoff: float = 2.0,
        max_connections: int = 20,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.params = params or {}
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff = backoff
        self.max_connections = max_connections
        self._rate_limiter = RateLimiter(rate=rate_limit)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BaseAsyncClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            limits=httpx.Limits(
                max_keepalive_connections=self.max_connections,
                max_connections=self.max_connections,
            ),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _retry_wait(self, attempt: int, reason: str, endpoint: str) -> None:
        delay = self.backoff * (2 ** attempt)
        logger.warning(
            "%s for %s, retrying in %.1fs (attempt %d/%d)",
            reason, endpoint, delay, attempt + 1, self.max_retries + 1,
        )
        await asyncio.sleep(delay)

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET an endpoint and return its decoded JSON body.

        Retries on 408/429/5xx gateway statuses, timeouts and network errors
        with exponential backoff. Other HTTP errors raise immediately.

        Args:
            endpoint: API endpoint path (relative to base_url)
            params: Query parameters merged over the client defaults

        Returns:
            Parsed JSON response

        Raises:
            APIProviderError: If the request fails after all retries
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with context manager.")

        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        query = {**self.params, **(params or {})}

        attempt = 0
        while True:
            await self._rate_limiter.acquire()
            logger.debug("GET %s%s (attempt %d/%d)", self.base_url, endpoint, attempt + 1, self.max_retries + 1)

            try:
                response = await self._client.get(endpoint, params=query)
            except httpx.TimeoutException as e:
                if attempt < self.max_retries:
                    await self._retry_wait(attempt, "Timeout", endpoint)
                    attempt += 1
                    continue
                logger.error("Request timeout for %s: %s", endpoint, e)
                raise APIProviderError(f"Request timeout: {e}") from e
            except httpx.TransportError as e:
                if attempt < self.max_retries:
                    await self._retry_wait(attempt, "Network error", endpoint)
                    attempt += 1
                    continue
                logger.error("Network error for %s: %s", endpoint, e)
                raise APIProviderError(f"Network error: {e}") from e

            logger.debug("Response: %d for %s", response.status_code, endpoint)

            if response.status_code >= 400:
                if response.status_code in _RETRYABLE_STATUS_CODES and attempt < self.max_retries:
                    await self._retry_wait(attempt, f"Retryable {response.status_code}", endpoint)
                    attempt += 1
                    continue
                error_body = response.text[:500]
                # 404 is an expected outcome for some endpoints; callers decide
                log = logger.debug if response.status_code == 404 else logger.error
                log("API error: %d %s - %s", response.status_code, endpoint, error_body)
                raise APIProviderError(
                    message=f"API request failed: {response.status_code}",
                    status_code=response.status_code,
                    response_body=error_body,
                )

            try:
                return response.json()
            except ValueError as e:
                logger.error("Failed to parse JSON response from %s: %s", endpoint, e)
                raise APIProviderError(
                    message=f"Invalid JSON response: {e}",
                    status_code=response.status_code,
                    response_body=response.text[:500],
                ) from e
