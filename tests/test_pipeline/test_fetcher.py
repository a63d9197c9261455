"""Tests for Fetcher — admission gate, error wrapping and contract checks."""

import asyncio

import pytest

from helpers import FakeProvider, benchmark, executive, listing
from execomp.clients import APIProviderError
from execomp.errors import ContractViolationError, FetchKind, ProviderFailureError
from execomp.pipeline.fetcher import Fetcher


class TestFetcher:
    """Tests for single gated fetches."""

    def test_rejects_empty_gate(self) -> None:
        with pytest.raises(ValueError):
            Fetcher(FakeProvider(), max_concurrency=0)

    @pytest.mark.asyncio
    async def test_fetch_listings(self) -> None:
        fetcher = Fetcher(FakeProvider(listings={"ASX": [listing("BRDL")]}))

        assert await fetcher.fetch_listings("ASX") == [listing("BRDL")]

    @pytest.mark.asyncio
    async def test_fetch_executives_empty_ok(self) -> None:
        fetcher = Fetcher(FakeProvider(executives={"MSFT": []}))

        assert await fetcher.fetch_executives("MSFT") == []

    @pytest.mark.asyncio
    async def test_fetch_benchmark_absent(self) -> None:
        fetcher = Fetcher(FakeProvider())

        assert await fetcher.fetch_benchmark("TYPO SERVICES") is None

    @pytest.mark.asyncio
    async def test_wraps_provider_error(self) -> None:
        class Failing(FakeProvider):
            async def get_benchmark(self, industry_title: str):
                raise APIProviderError("API request failed: 503", status_code=503)

        fetcher = Fetcher(Failing())

        with pytest.raises(ProviderFailureError) as exc_info:
            await fetcher.fetch_benchmark("MINING")

        assert exc_info.value.fetch is FetchKind.BENCHMARK
        assert exc_info.value.key == "MINING"
        assert exc_info.value.status_code == 502
        assert "503" in exc_info.value.detail
        assert isinstance(exc_info.value.__cause__, APIProviderError)

    @pytest.mark.asyncio
    async def test_contract_violation_not_wrapped(self) -> None:
        fetcher = Fetcher(FakeProvider(executives={"A": [executive("B", "Bob", 1.0, "X")]}))

        with pytest.raises(ContractViolationError) as exc_info:
            await fetcher.fetch_executives("A")

        assert exc_info.value.fetch is FetchKind.EXECUTIVES

    @pytest.mark.asyncio
    async def test_benchmark_mismatch(self) -> None:
        fetcher = Fetcher(FakeProvider(benchmarks={"A": benchmark("B", 1.0)}))

        with pytest.raises(ContractViolationError):
            await fetcher.fetch_benchmark("A")

    @pytest.mark.asyncio
    async def test_cancellation_releases_permit(self) -> None:
        provider = FakeProvider(executives={"A": []}, delay=10.0)
        fetcher = Fetcher(provider, max_concurrency=1)

        task = asyncio.create_task(fetcher.fetch_executives("A"))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert fetcher._gate._value == 1
        assert provider.cancelled == 1

    @pytest.mark.asyncio
    async def test_gate_limits_in_flight(self) -> None:
        provider = FakeProvider(executives={str(i): [] for i in range(10)}, delay=0.01)
        fetcher = Fetcher(provider, max_concurrency=4)

        await asyncio.gather(*(fetcher.fetch_executives(str(i)) for i in range(10)))

        assert provider.max_in_flight == 4
