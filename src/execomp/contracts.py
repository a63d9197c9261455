"""Identity checks on provider results.

Each record must belong to the key it was fetched under. A mismatch raises
ContractViolationError. The checks run before a result is cached and again
in the pipeline, so an invalid payload is never stored or served.
"""

from execomp.errors import ContractViolationError, FetchKind
from execomp.models import ExecutiveRecord, IndustryBenchmark, Listing, ListingKind


def check_listings(exchange: str, listings: list[Listing]) -> list[Listing]:
    """Every listing must be an equity traded on ``exchange``."""
    for listing in listings:
        if listing.kind is not ListingKind.EQUITY:
            raise ContractViolationError(
                FetchKind.LISTINGS, exchange, f"Unexpected stock type: {listing.type}",
            )
        if listing.exchange != exchange:
            raise ContractViolationError(
                FetchKind.LISTINGS, exchange, f"Unexpected stock exchange symbol: {listing.exchange}",
            )
    return listings


def check_executives(company_symbol: str, executives: list[ExecutiveRecord]) -> list[ExecutiveRecord]:
    for executive in executives:
        if executive.company_symbol != company_symbol:
            raise ContractViolationError(
                FetchKind.EXECUTIVES, company_symbol,
                f"Unexpected executive company symbol: {executive.company_symbol}",
            )
    return executives


def check_benchmark(industry_title: str, benchmark: IndustryBenchmark | None) -> IndustryBenchmark | None:
    """An absent benchmark always passes."""
    if benchmark is not None and benchmark.industry_title != industry_title:
        raise ContractViolationError(
            FetchKind.BENCHMARK, industry_title,
            f"Unexpected benchmark industry title: {benchmark.industry_title}",
        )
    return benchmark
