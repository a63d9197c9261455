"""Read-through caching decorator for a CompanyInfoProvider.

Serves each of the three provider reads from the TTL cache while the entry
is live; otherwise delegates, checks the result against its key, stores it
and returns it. Failures, contract violations included, propagate and are
never cached. An absent benchmark is a value and is cached like any other.

Record lists are stored as tuples and every caller gets a fresh list, so
nothing a caller does to its result reaches the cached entry.

Two concurrent misses on the same key may both reach the provider; the
later store wins.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from execomp.cache.ttl_cache import TTLCache
from execomp.clients.provider import CompanyInfoProvider
from execomp.contracts import check_benchmark, check_executives, check_listings
from execomp.errors import FetchKind
from execomp.models import ExecutiveRecord, IndustryBenchmark, Listing

logger = logging.getLogger(__name__)


def _freeze(value: Any) -> Any:
    return tuple(value) if isinstance(value, list) else value


def _thaw(value: Any) -> Any:
    return list(value) if isinstance(value, tuple) else value


class CachingCompanyInfoClient:
    """CompanyInfoProvider that reads through a TTLCache.

    Args:
        provider: The provider to delegate misses to
        cache: Cache shared by all three operations (default: fresh, 1h TTL)

    Usage:
        async with CompanyInfoClient(api_key, base_url) as live:
            client = CachingCompanyInfoClient(live, TTLCache(ttl=3600))
            await client.get_listings("ASX")  # provider
            await client.get_listings("ASX")  # cache
    """

    def __init__(self, provider: CompanyInfoProvider, cache: TTLCache | None = None) -> None:
        self.provider = provider
        self.cache = cache if cache is not None else TTLCache()

    async def _read_through(
        self,
        kind: FetchKind,
        argument: str,
        fetch: Callable[[str], Awaitable[Any]],
        check: Callable[[str, Any], Any],
    ) -> Any:
        key = (kind, argument)
        entry = self.cache.lookup(key)
        if entry is not None:
            logger.debug("Serving %s from cache for %s", kind.value, argument)
            return _thaw(entry.value)

        value = check(argument, await fetch(argument))
        logger.debug("Inserting %s result into cache for %s", kind.value, argument)
        entry = self.cache.store(key, _freeze(value))
        return _thaw(entry.value)

    async def get_listings(self, exchange: str) -> list[Listing]:
        return await self._read_through(
            FetchKind.LISTINGS, exchange, self.provider.get_listings, check_listings,
        )

    async def get_executives(self, company_symbol: str) -> list[ExecutiveRecord]:
        return await self._read_through(
            FetchKind.EXECUTIVES, company_symbol, self.provider.get_executives, check_executives,
        )

    async def get_benchmark(self, industry_title: str) -> IndustryBenchmark | None:
        return await self._read_through(
            FetchKind.BENCHMARK, industry_title, self.provider.get_benchmark, check_benchmark,
        )
