"""Record factories and a dict-backed provider for execomp tests."""

import asyncio
from collections import Counter

from execomp.models import ExecutiveRecord, IndustryBenchmark, Listing


def listing(symbol: str, exchange: str = "ASX", type: str = "stock") -> Listing:
    return Listing(symbol=symbol, exchangeShortName=exchange, type=type)


def executive(symbol: str, name: str, total: float, industry: str) -> ExecutiveRecord:
    return ExecutiveRecord(symbol=symbol, nameAndPosition=name, total=total, industryTitle=industry)


def benchmark(industry: str, average: float) -> IndustryBenchmark:
    return IndustryBenchmark(industryTitle=industry, averageCompensation=average)


class FakeProvider:
    """Dict-backed CompanyInfoProvider that records calls and concurrency.

    Args:
        listings: exchange -> listings
        executives: company symbol -> executive records
        benchmarks: industry title -> benchmark (missing means absent)
        failures: call keys ("listings:ASX", "executives:BRDL", ...) that raise
        delay: seconds each call sleeps, to force overlap
        delays: per call key overrides of delay
    """

    def __init__(
        self,
        listings: dict[str, list[Listing]] | None = None,
        executives: dict[str, list[ExecutiveRecord]] | None = None,
        benchmarks: dict[str, IndustryBenchmark] | None = None,
        failures: set[str] | None = None,
        delay: float = 0.0,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.listings = listings or {}
        self.executives = executives or {}
        self.benchmarks = benchmarks or {}
        self.failures = failures or set()
        self.delay = delay
        self.delays = delays or {}
        self.calls: Counter[str] = Counter()
        self.in_flight = 0
        self.max_in_flight = 0
        self.cancelled = 0

    async def _call(self, key: str) -> None:
        self.calls[key] += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(key, self.delay))
            if key in self.failures:
                raise RuntimeError(f"backend down for {key}")
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1

    def count(self, prefix: str) -> int:
        return sum(n for key, n in self.calls.items() if key.startswith(prefix))

    async def get_listings(self, exchange: str) -> list[Listing]:
        await self._call(f"listings:{exchange}")
        return list(self.listings.get(exchange, []))

    async def get_executives(self, company_symbol: str) -> list[ExecutiveRecord]:
        await self._call(f"executives:{company_symbol}")
        return list(self.executives.get(company_symbol, []))

    async def get_benchmark(self, industry_title: str) -> IndustryBenchmark | None:
        await self._call(f"benchmark:{industry_title}")
        return self.benchmarks.get(industry_title)
