"""Fetcher — admission-gated, contract-checked provider calls.

Every outgoing fetch of a screening run goes through one shared
asyncio.Semaphore, so at most ``max_concurrency`` fetches are in flight at
once across all stages. The permit is held by ``async with`` and released
on every exit path, including failure and cancellation.

Provider exceptions are wrapped in ProviderFailureError. Records whose
identity field does not match the key they were fetched under raise
ContractViolationError. Cancellation and errors that are already a
CompensationError are never wrapped.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from execomp.clients.provider import CompanyInfoProvider
from execomp.contracts import check_benchmark, check_executives, check_listings
from execomp.errors import CompensationError, FetchKind, ProviderFailureError
from execomp.models import ExecutiveRecord, IndustryBenchmark, Listing

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Fetcher:
    """Fetches provider records through a bounded admission gate.

    Args:
        provider: Where records come from (usually the caching client)
        max_concurrency: Admission gate size (default: 20)

    Usage:
        fetcher = Fetcher(provider, max_concurrency=20)
        listings = await fetcher.fetch_listings("ASX")
    """

    def __init__(self, provider: CompanyInfoProvider, max_concurrency: int = 20) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.provider = provider
        self.max_concurrency = max_concurrency
        self._gate = asyncio.Semaphore(max_concurrency)

    async def _admit(self, kind: FetchKind, key: str, fetch: Callable[[str], Awaitable[T]]) -> T:
        async with self._gate:
            try:
                return await fetch(key)
            except (asyncio.CancelledError, CompensationError):
                raise
            except Exception as e:
                logger.warning("%s fetch for %s FAILED — %s", kind.value, key, e)
                raise ProviderFailureError(kind, key, e) from e

    async def fetch_listings(self, exchange: str) -> list[Listing]:
        """Fetch the equity listings of an exchange."""
        listings = await self._admit(FetchKind.LISTINGS, exchange, self.provider.get_listings)
        return check_listings(exchange, listings)

    async def fetch_executives(self, company_symbol: str) -> list[ExecutiveRecord]:
        """Fetch the executives of one company. Zero executives is fine."""
        executives = await self._admit(
            FetchKind.EXECUTIVES, company_symbol, self.provider.get_executives,
        )
        return check_executives(company_symbol, executives)

    async def fetch_benchmark(self, industry_title: str) -> IndustryBenchmark | None:
        """Fetch an industry benchmark. None means the industry has none."""
        benchmark = await self._admit(
            FetchKind.BENCHMARK, industry_title, self.provider.get_benchmark,
        )
        return check_benchmark(industry_title, benchmark)
