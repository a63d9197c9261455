"""Coordinator — listings → executives → benchmarks → filter.

Two fan-out/join phases behind one admission gate:

    listings(exchange)
      └─ executives(symbol)   for each distinct symbol      (fan-out, join)
           └─ benchmark(title) for each distinct industry   (fan-out, join)
                └─ filter_by_benchmark(...)

Any failing fetch aborts the run, cancels the sibling fetches still in
flight and surfaces as a CompensationError. Partial results are never
returned.

Usage:
    coordinator = Coordinator(provider, max_concurrency=20)
    results = await coordinator.run("ASX")
    for row in results:
        print(row.name_and_position, row.compensation)
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from execomp.cache import CachingCompanyInfoClient, TTLCache
from execomp.clients import CompanyInfoClient, CompanyInfoProvider
from execomp.config import Settings
from execomp.engine import DEFAULT_MULTIPLE, benchmark_map, filter_by_benchmark
from execomp.errors import CompensationError, NoListingsFoundError, RunCancelledError
from execomp.models import ExecutiveCompensation, ExecutiveRecord
from execomp.pipeline.fetcher import Fetcher

logger = logging.getLogger(__name__)

T = TypeVar("T")


def distinct_non_empty(values: Iterable[str]) -> list[str]:
    """Drop empty strings and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def _first_error(group: BaseExceptionGroup) -> BaseException:
    """Pick the exception to surface from a failed TaskGroup."""
    leaves = list(_leaves(group))
    for exc in leaves:
        if isinstance(exc, CompensationError):
            return exc
    return leaves[0]


def _leaves(exc: BaseException) -> Iterable[BaseException]:
    if isinstance(exc, BaseExceptionGroup):
        for inner in exc.exceptions:
            yield from _leaves(inner)
    else:
        yield exc


class Coordinator:
    """Screens an exchange for executives paid above their industry benchmark.

    The admission gate belongs to the coordinator, so concurrent runs on the
    same instance share it too.

    Args:
        provider: Provider to read through (usually a CachingCompanyInfoClient)
        max_concurrency: Max fetches in flight at once (default: 20)
        multiple: Benchmark multiple an executive must reach (default: 1.10)
    """

    def __init__(
        self,
        provider: CompanyInfoProvider,
        max_concurrency: int = 20,
        multiple: float = DEFAULT_MULTIPLE,
    ) -> None:
        self.fetcher = Fetcher(provider, max_concurrency=max_concurrency)
        self.multiple = multiple

    async def run(
        self,
        exchange: str,
        cancel: asyncio.Event | None = None,
    ) -> list[ExecutiveCompensation]:
        """Run the full pipeline for one exchange.

        Args:
            exchange: Exchange short name (e.g. ASX)
            cancel: Optional signal; once set, every in-flight and pending
                fetch is cancelled and the run fails with RunCancelledError

        Returns:
            Qualifying executives, in the order their companies were dispatched

        Raises:
            NoListingsFoundError: The exchange has no listings
            ProviderFailureError: A fetch failed at the provider
            ContractViolationError: A record does not match its fetch key
            RunCancelledError: ``cancel`` was set before the run finished
        """
        if cancel is None:
            return await self._screen(exchange)
        if cancel.is_set():
            raise RunCancelledError(exchange)

        pipeline = asyncio.create_task(self._screen(exchange))
        cancelled = asyncio.create_task(cancel.wait())
        try:
            await asyncio.wait({pipeline, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (pipeline, cancelled):
                if not task.done():
                    task.cancel()
            # Let cancelled fetches unwind and release their permits
            await asyncio.gather(pipeline, cancelled, return_exceptions=True)

        if pipeline.cancelled():
            logger.info("Screening run for %s cancelled", exchange)
            raise RunCancelledError(exchange)
        return pipeline.result()

    async def _screen(self, exchange: str) -> list[ExecutiveCompensation]:
        listings = await self.fetcher.fetch_listings(exchange)
        if not listings:
            # Most likely a backend problem rather than an empty exchange
            logger.error("Found 0 listings on %s", exchange)
            raise NoListingsFoundError(exchange)

        symbols = distinct_non_empty(listing.symbol for listing in listings)
        logger.info("%s: %d listings, %d distinct companies", exchange, len(listings), len(symbols))

        per_company = await self._fan_out(symbols, self.fetcher.fetch_executives)
        executives: list[ExecutiveRecord] = [e for batch in per_company for e in batch]

        industries = distinct_non_empty(e.industry_title for e in executives)
        logger.info("%s: %d executives across %d industries", exchange, len(executives), len(industries))

        benchmarks = benchmark_map(await self._fan_out(industries, self.fetcher.fetch_benchmark))
        if len(benchmarks) < len(industries):
            logger.info("%s: no benchmark for %d industries", exchange, len(industries) - len(benchmarks))

        results = filter_by_benchmark(executives, benchmarks, multiple=self.multiple)
        logger.info("%s: %d executives at or above %.2fx benchmark", exchange, len(results), self.multiple)
        return results

    async def _fan_out(self, keys: list[str], fetch: Callable[[str], Awaitable[T]]) -> list[T]:
        """Fetch every key concurrently and join. Results follow ``keys`` order."""
        error: BaseException | None = None
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(fetch(key)) for key in keys]
        except BaseExceptionGroup as failed:
            error = _first_error(failed)
        if error is not None:
            # Outside the except block: __cause__ stays intact
            raise error
        return [task.result() for task in tasks]


def build_coordinator(settings: Settings, client: CompanyInfoClient) -> Coordinator:
    """Wire live client → read-through cache → coordinator from settings.

    The caller owns the client's lifetime (``async with client``).
    """
    cache = TTLCache(ttl=settings.cache_ttl_seconds, jitter=settings.cache_ttl_jitter_seconds)
    return Coordinator(
        CachingCompanyInfoClient(client, cache),
        max_concurrency=settings.max_concurrent_requests,
        multiple=settings.compensation_multiple,
    )
