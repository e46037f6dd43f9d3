"""
Exception hierarchy for the OKX client.

Every error carries a ``retryable`` flag so a caller-level retry policy can
decide whether backing off and resending makes sense. The client itself never
retries venue errors.
"""

from typing import Any, Dict, Optional


class OkxError(Exception):
    """Base exception for all OKX client errors."""

    retryable = False

    def __init__(
        self,
        message: str = "",
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.response_data = response_data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# Venue / business errors

class ExchangeError(OkxError):
    """Unclassified venue error; the original code and message are preserved."""


class AuthenticationError(ExchangeError):
    """Credentials, signature or timestamp rejected."""


class PermissionDenied(AuthenticationError):
    pass


class AccountSuspended(AuthenticationError):
    pass


class AccountNotEnabled(PermissionDenied):
    pass


class InvalidNonce(AuthenticationError):
    """Request timestamp outside the venue's accepted window."""


class RestrictedLocation(ExchangeError):
    """Trading blocked for the caller's jurisdiction."""


class BadRequest(ExchangeError):
    """Malformed input."""


class BadSymbol(BadRequest):
    pass


class ConflictingOrderParams(BadRequest):
    """Two order options describe the same thing with different values."""


class InsufficientFunds(ExchangeError):
    pass


class InvalidOrder(ExchangeError):
    """Order parameters or business rules rejected."""


class OrderNotFound(InvalidOrder):
    pass


class CancelPending(InvalidOrder):
    pass


class DuplicateOrderId(InvalidOrder):
    pass


class MissingCost(InvalidOrder):
    """Spot market buy sized in quote currency without a price or cost."""


class NotSupported(ExchangeError):
    pass


class BadResponse(ExchangeError):
    """Response body could not be decoded."""


# Transient errors

class NetworkError(OkxError):
    retryable = True


class DDoSProtection(NetworkError):
    """HTTP-level throttling (status 429)."""


class RateLimitExceeded(DDoSProtection):
    """Venue-code throttling (e.g. 50011)."""


class ExchangeNotAvailable(NetworkError):
    pass


class OnMaintenance(ExchangeNotAvailable):
    pass


class RequestTimeout(NetworkError):
    pass
