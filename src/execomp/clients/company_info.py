"""CompanyInfo service client for listings, executives and benchmarks.

Provides async access to the three CompanyInfo endpoints:
- Companies listed on an exchange
- Executives of a company, with total compensation
- Average compensation benchmark of an industry

Payloads are decoded into validated pydantic records. Identity checks on
the decoded records (right exchange, right company) are left to the
pipeline, which owns the contract.

Usage:
    from execomp.config import settings
    from execomp.clients.company_info import CompanyInfoClient

    async with CompanyInfoClient(settings.service_api_key, settings.company_info_base_url) as client:
        listings = await client.get_listings("ASX")
        executives = await client.get_executives("BHP")
"""

import logging
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter, ValidationError

from execomp.clients.base import APIProviderError, BaseAsyncClient
from execomp.models import ExecutiveRecord, IndustryBenchmark, Listing

logger = logging.getLogger(__name__)

_LISTINGS = TypeAdapter(list[Listing])
_EXECUTIVES = TypeAdapter(list[ExecutiveRecord])


class CompanyInfoClient(BaseAsyncClient):
    """Async client for the CompanyInfo service.

    Args:
        api_key: Service API key, sent as the ``code`` query parameter
        base_url: Service base URL
        rate_limit: Max requests per second (default: 10)
        timeout: Request timeout in seconds (default: 30)
        max_retries: Extra attempts on transient failures (default: 6)
        max_connections: Connection pool size (default: 20)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        rate_limit: int = 10,
        timeout: float = 30.0,
        max_retries: int = 6,
        max_connections: int = 20,
    ) -> None:
        super().__init__(
            base_url=base_url,
            params={"code": api_key},
            rate_limit=rate_limit,
            timeout=timeout,
            max_retries=max_retries,
            max_connections=max_connections,
        )

    @staticmethod
    def _decode(adapter: TypeAdapter | type[BaseModel], payload: Any, what: str) -> Any:
        try:
            if isinstance(adapter, TypeAdapter):
                return adapter.validate_python(payload)
            return adapter.model_validate(payload)
        except ValidationError as e:
            logger.error("Invalid %s payload: %s", what, e)
            raise APIProviderError(f"Invalid {what} payload: {e}") from e

    async def get_listings(self, exchange: str) -> list[Listing]:
        """Get all companies listed on an exchange.

        Args:
            exchange: Exchange short name (e.g. ASX)

        Returns:
            List of listings. Each has symbol, exchange and type.
        """
        endpoint = f"/api/exchanges/{quote(exchange, safe='')}/companies"
        payload = await self.get(endpoint)
        return self._decode(_LISTINGS, payload, "listings")

    async def get_executives(self, company_symbol: str) -> list[ExecutiveRecord]:
        """Get the executives of a company.

        Args:
            company_symbol: Company ticker symbol

        Returns:
            List of executive records, possibly empty.
        """
        endpoint = f"/api/companies/{quote(company_symbol, safe='')}/executives"
        payload = await self.get(endpoint)
        return self._decode(_EXECUTIVES, payload, "executives")

    async def get_benchmark(self, industry_title: str) -> IndustryBenchmark | None:
        """Get the compensation benchmark of an industry.

        Args:
            industry_title: Industry title as reported on executive records

        Returns:
            The benchmark, or None when the service has none (HTTP 404 or a
            null body).
        """
        endpoint = f"/api/industries/{quote(industry_title, safe='')}/benchmark"
        try:
            payload = await self.get(endpoint)
        except APIProviderError as e:
            if e.status_code == 404:
                logger.debug("No benchmark for industry %s", industry_title)
                return None
            raise
        if payload is None:
            return None
        return self._decode(IndustryBenchmark, payload, "benchmark")
