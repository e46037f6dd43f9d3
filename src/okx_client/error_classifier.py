"""
Classification of venue responses into typed errors.

The classifier never retries. It inspects the response envelope
``{code, msg, data: [{sCode, sMsg, ...}]}`` and either hands back the data
list or raises the matching exception from ``errors``. Top-level code ``2``
(partial batch success) is not a failure: the data is returned and each
item is classified on its own with ``classify_item``.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from .constants import PARTIAL_SUCCESS_CODE, SUCCESS_CODE
from .error_codes import BROAD_ERRORS, EXACT_ERRORS
from .errors import (
    AuthenticationError,
    BadRequest,
    BadResponse,
    DDoSProtection,
    ExchangeError,
    ExchangeNotAvailable,
    OkxError,
    PermissionDenied,
)

logger = logging.getLogger(__name__)

HTTP_ERRORS: Dict[int, Type[OkxError]] = {
    400: BadRequest,
    401: AuthenticationError,
    403: PermissionDenied,
    404: BadRequest,
    429: DDoSProtection,
    500: ExchangeNotAvailable,
    502: ExchangeNotAvailable,
    503: ExchangeNotAvailable,
    504: ExchangeNotAvailable,
}


def classify(code: Optional[str], message: Optional[str] = None) -> Type[OkxError]:
    """
    Resolve a venue code and message to an exception class.

    Exact code match first, then a broad substring match on the message,
    falling back to ``ExchangeError``.
    """
    if code is not None and str(code) in EXACT_ERRORS:
        return EXACT_ERRORS[str(code)]
    if message:
        for fragment, error_class in BROAD_ERRORS.items():
            if fragment in message:
                return error_class
    return ExchangeError


def build_error(
    code: Optional[str],
    message: Optional[str],
    status_code: Optional[int] = None,
    response_data: Optional[Dict[str, Any]] = None,
) -> OkxError:
    """Instantiate the classified error, keeping the original code and message."""
    error_class = classify(code, message)
    text = f"okx {code}: {message}" if code is not None else f"okx: {message}"
    return error_class(
        text,
        code=str(code) if code is not None else None,
        status_code=status_code,
        response_data=response_data,
    )


def classify_item(item: Dict[str, Any]) -> Optional[OkxError]:
    """
    Classify one batch item by its ``sCode``.

    Returns:
        The error for a rejected item, or None when the item succeeded or
        carries no sub-status
    """
    if not isinstance(item, dict):
        return None
    s_code = item.get("sCode")
    if s_code is None or str(s_code) in ("", SUCCESS_CODE):
        return None
    return build_error(str(s_code), item.get("sMsg"), response_data=item)


def check_http_status(status_code: int, body: Any) -> None:
    """Raise for an HTTP error status whose body carries no venue code."""
    if status_code < 400:
        return
    error_class = HTTP_ERRORS.get(status_code)
    if error_class is None:
        error_class = ExchangeNotAvailable if status_code >= 500 else ExchangeError
    raise error_class(
        f"HTTP {status_code}: {body}",
        status_code=status_code,
        response_data=body if isinstance(body, dict) else None,
    )


def check_response(response: Any, status_code: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Validate a response envelope and return its data list.

    Args:
        response: Decoded JSON body
        status_code: HTTP status of the response, when known

    Returns:
        The ``data`` list for codes ``0`` and ``2``

    Raises:
        OkxError subclass matching the top-level code, or the first rejected
        item's ``sCode`` when the envelope carries one
    """
    if not isinstance(response, dict) or "code" not in response:
        if status_code is not None:
            check_http_status(status_code, response)
        raise BadResponse(f"Unexpected response: {str(response)[:200]}", status_code=status_code)

    code = str(response.get("code"))
    data = response.get("data")
    if data is None:
        data = []
    elif not isinstance(data, list):
        data = [data]

    if code == SUCCESS_CODE:
        return data
    if code == PARTIAL_SUCCESS_CODE:
        logger.debug(f"Batch partially succeeded: {response.get('msg')}")
        return data

    for item in data:
        item_error = classify_item(item)
        if item_error is not None:
            item_error.status_code = status_code
            item_error.response_data = response
            raise item_error

    raise build_error(code, response.get("msg"), status_code=status_code, response_data=response)
