"""Protocol for the remote company-information provider.

Structural typing: the live HTTP client, the caching decorator and test
doubles all satisfy it without sharing a base class.
"""

from typing import Protocol, runtime_checkable

from execomp.models import ExecutiveRecord, IndustryBenchmark, Listing


@runtime_checkable
class CompanyInfoProvider(Protocol):
    """Three idempotent reads. Failures raise; an unknown benchmark is None."""

    async def get_listings(self, exchange: str) -> list[Listing]: ...

    async def get_executives(self, company_symbol: str) -> list[ExecutiveRecord]: ...

    async def get_benchmark(self, industry_title: str) -> IndustryBenchmark | None: ...
