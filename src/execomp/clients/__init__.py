"""Remote data provider layer for execomp.

Async HTTP client for the CompanyInfo service plus the provider protocol
every implementation (live, cached, test double) satisfies.
"""

from execomp.clients.base import BaseAsyncClient, RateLimiter, APIProviderError
from execomp.clients.company_info import CompanyInfoClient
from execomp.clients.provider import CompanyInfoProvider

__all__ = [
    "BaseAsyncClient",
    "RateLimiter",
    "APIProviderError",
    "CompanyInfoClient",
    "CompanyInfoProvider",
]
