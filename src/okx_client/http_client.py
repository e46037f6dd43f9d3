"""
HTTP client for OKX API.

Handles request execution, transport-level retry, signing, and response
classification. Venue errors are never retried here; only connection
failures, timeouts and bare 5xx responses of GET requests are. A failed
POST may already have reached the venue, so it is raised at once.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
from aiohttp import ClientResponse, ClientSession
from yarl import URL

from .auth import OkxSigner, PreparedRequest
from .error_classifier import check_response
from .errors import ExchangeNotAvailable, NetworkError, OkxError, RequestTimeout
from .models.config import ConnectionConfig, RetryConfig

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET"})


def _is_envelope(payload: Any) -> bool:
    return isinstance(payload, dict) and "code" in payload


class HttpClient:
    """HTTP client specialized for OKX API interactions."""

    def __init__(
        self,
        config: ConnectionConfig,
        signer: OkxSigner,
        retry_config: Optional[RetryConfig] = None,
    ):
        """Initialize HTTP client with configuration and request signer."""
        self._config = config
        self._signer = signer
        self._retry_config = retry_config or RetryConfig()

    async def request(
        self,
        session: ClientSession,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
        private: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        Execute a request and return the envelope's ``data`` list.

        Args:
            session: aiohttp session to send through
            method: HTTP method
            path: API path, e.g. ``/api/v5/trade/order``
            params: Query parameters
            data: JSON body (dict or list)
            private: Sign the request

        Raises:
            OkxError subclass classified from the response
        """
        prepared = PreparedRequest.create(method, path, params, data)
        url = URL(f"{self._config.base_url}{prepared.request_path}", encoded=True)
        return await self._execute_with_retry(session, prepared, url, private)

    def _headers(self, prepared: PreparedRequest, private: bool) -> Dict[str, str]:
        if private:
            # signed per attempt: the timestamp must be fresh
            return dict(self._signer.sign(prepared).headers)
        return self._signer.public_headers()

    async def _execute_with_retry(
        self,
        session: ClientSession,
        prepared: PreparedRequest,
        url: URL,
        private: bool,
    ) -> List[Dict[str, Any]]:
        """Execute request with retry logic."""
        last_exception: Optional[OkxError] = None
        max_retries = self._retry_config.max_retries if prepared.method in IDEMPOTENT_METHODS else 0

        for attempt in range(max_retries + 1):
            try:
                status, payload = await self._send(session, prepared, url, private)
            except asyncio.TimeoutError as e:
                last_exception = RequestTimeout(f"{prepared.method} {prepared.path} timed out")
                last_exception.__cause__ = e
            except aiohttp.ClientError as e:
                last_exception = NetworkError(f"{prepared.method} {prepared.path} failed: {e}")
                last_exception.__cause__ = e
            else:
                if status in self._retry_config.retry_on_status and not _is_envelope(payload):
                    last_exception = ExchangeNotAvailable(
                        f"Server error {status}: {str(payload)[:200]}",
                        status_code=status,
                    )
                else:
                    return check_response(payload, status)

            # Don't retry on the last attempt
            if attempt == max_retries:
                break

            delay = self._retry_config.retry_delay * (
                self._retry_config.backoff_factor ** attempt
            )
            logger.debug(
                f"Retrying {prepared.method} {prepared.path} in {delay:.2f}s "
                f"(attempt {attempt + 1}/{max_retries}): {last_exception}"
            )
            await asyncio.sleep(delay)

        logger.error(f"{prepared.method} {prepared.path} failed after all retries: {last_exception}")
        raise last_exception or NetworkError("Request failed after all retries")

    async def _send(
        self,
        session: ClientSession,
        prepared: PreparedRequest,
        url: URL,
        private: bool,
    ) -> Tuple[int, Any]:
        request_kwargs: Dict[str, Any] = {
            "method": prepared.method,
            "url": url,
            "headers": self._headers(prepared, private),
        }
        if prepared.body:
            # exactly the bytes that were signed
            request_kwargs["data"] = prepared.body.encode("utf-8")

        async with session.request(**request_kwargs) as response:
            return response.status, await self._process_response(response)

    async def _process_response(self, response: ClientResponse) -> Any:
        """Decode a JSON body; non-JSON text is handed back as is."""
        response_text = await response.text()

        if not response_text:
            return None

        try:
            return json.loads(response_text)
        except json.JSONDecodeError:
            logger.warning(f"Non-JSON response (status {response.status}): {response_text[:200]}")
            return response_text
