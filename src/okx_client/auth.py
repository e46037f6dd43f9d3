"""
Authentication and signing utilities for OKX API
"""

import base64
import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode

from .errors import AuthenticationError
from .utils import iso8601_now


@dataclass(frozen=True)
class ApiCredentials:
    """Container for API credentials"""
    api_key: str
    api_secret: str
    passphrase: str


@dataclass(frozen=True)
class PreparedRequest:
    """A request frozen before signing.

    Any change after signing produces a different canonical string, so the
    signature no longer verifies.
    """
    method: str
    path: str
    query: Tuple[Tuple[str, str], ...] = ()
    body: str = ""

    @classmethod
    def create(
        cls,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Any] = None,
    ) -> "PreparedRequest":
        """Freeze method, path, query and JSON body into a request."""
        method = method.upper()
        query = tuple((str(k), str(v)) for k, v in (params or {}).items())
        body = ""
        if method != "GET" and data is not None:
            body = json.dumps(data, separators=(",", ":"))
        return cls(method=method, path=path, query=query, body=body)

    @property
    def request_path(self) -> str:
        """Path plus query string, exactly as sent."""
        if self.query:
            return f"{self.path}?{urlencode(self.query)}"
        return self.path

    def canonical_string(self, timestamp: str) -> str:
        return f"{timestamp}{self.method}{self.request_path}{self.body}"


@dataclass(frozen=True)
class SignedRequest:
    """Prepared request plus its authentication headers."""
    request: PreparedRequest
    timestamp: str
    headers: Mapping[str, str]


class OkxSigner:
    """
    Handles request signing for OKX API authentication.

    Signature = base64(HMAC-SHA256(secret, timestamp + METHOD + path + body)).
    """

    def __init__(self, credentials: ApiCredentials, simulation: bool = False):
        """
        Initialize the signer with API credentials.

        Args:
            credentials: API credentials containing key, secret and passphrase
            simulation: Add the demo-trading header to every request
        """
        self.credentials = credentials
        self.simulation = simulation

    def sign(self, request: PreparedRequest, timestamp: Optional[str] = None) -> SignedRequest:
        """
        Sign a prepared request.

        Args:
            request: Frozen request to sign
            timestamp: ISO-8601 millisecond timestamp; defaults to now

        Returns:
            SignedRequest carrying the authentication headers
        """
        if not self.validate_credentials():
            raise AuthenticationError("API key, secret and passphrase are required for private endpoints")

        timestamp = timestamp or iso8601_now()
        signature = self._generate_signature(request.canonical_string(timestamp))

        headers = {
            "OK-ACCESS-KEY": self.credentials.api_key,
            "OK-ACCESS-PASSPHRASE": self.credentials.passphrase,
            "OK-ACCESS-TIMESTAMP": timestamp,
            "OK-ACCESS-SIGN": signature,
            "Content-Type": "application/json",
        }
        if self.simulation:
            headers["x-simulated-trading"] = "1"

        return SignedRequest(request=request, timestamp=timestamp, headers=headers)

    def verify(self, request: PreparedRequest, timestamp: str, signature: str) -> bool:
        """Check a signature against the request's canonical string."""
        expected = self._generate_signature(request.canonical_string(timestamp))
        return hmac.compare_digest(expected, signature)

    def _generate_signature(self, message: str) -> str:
        """
        Generate base64 HMAC-SHA256 signature for the given message.
        """
        digest = hmac.new(
            self.credentials.api_secret.encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha256,
        ).digest()
        return base64.b64encode(digest).decode("utf-8")

    def public_headers(self) -> Dict[str, str]:
        """Headers for unauthenticated requests."""
        headers = {"Content-Type": "application/json"}
        if self.simulation:
            headers["x-simulated-trading"] = "1"
        return headers

    def validate_credentials(self) -> bool:
        """
        Validate that API key, secret and passphrase are present.
        """
        return bool(
            self.credentials.api_key
            and self.credentials.api_secret
            and self.credentials.passphrase
        )
