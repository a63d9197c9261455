"""execomp exception hierarchy.

Every failure of a screening run surfaces as a CompensationError subclass.
Each carries an ErrorKind, a human-readable detail string and the HTTP
status an endpoint layer should answer with.
"""

from enum import Enum


class FetchKind(str, Enum):
    """The three provider operations. Also the operation part of a cache key."""

    LISTINGS = "listings"
    EXECUTIVES = "executives"
    BENCHMARK = "benchmark"


class ErrorKind(str, Enum):
    """Failure classes of a screening run."""

    PROVIDER_FAILURE = "provider_failure"
    CONTRACT_VIOLATION = "contract_violation"
    NO_LISTINGS_FOUND = "no_listings_found"
    CANCELLED = "cancelled"


class CompensationError(Exception):
    """Base exception for all screening run failures."""

    kind: ErrorKind
    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ProviderFailureError(CompensationError):
    """The remote data provider failed one fetch. The cause is chained."""

    kind = ErrorKind.PROVIDER_FAILURE
    status_code = 502

    def __init__(self, fetch: FetchKind, key: str, cause: BaseException) -> None:
        self.fetch = fetch
        self.key = key
        super().__init__(f"{fetch.value} fetch for '{key}' failed: {cause}")


class ContractViolationError(CompensationError):
    """A returned record does not match the key it was fetched under."""

    kind = ErrorKind.CONTRACT_VIOLATION
    status_code = 502

    def __init__(self, fetch: FetchKind, key: str, message: str) -> None:
        self.fetch = fetch
        self.key = key
        super().__init__(f"{fetch.value} fetch for '{key}': {message}")


class NoListingsFoundError(CompensationError):
    """The exchange returned zero listings, which points at a backend outage."""

    kind = ErrorKind.NO_LISTINGS_FOUND
    status_code = 500

    def __init__(self, exchange: str) -> None:
        self.exchange = exchange
        super().__init__(f"Found 0 listings on {exchange}")


class RunCancelledError(CompensationError):
    """The run was aborted through its cancellation signal."""

    kind = ErrorKind.CANCELLED
    # Client closed request; no body is sent
    status_code = 499

    def __init__(self, exchange: str) -> None:
        self.exchange = exchange
        super().__init__(f"Screening run for {exchange} was cancelled")
