"""
Utility functions for OKX client.

Helper functions and utilities following functional programming principles.
"""

import re
import secrets
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from .constants import CLIENT_ORDER_ID_MAX_LENGTH
from .precise import to_decimal

_CLIENT_ORDER_ID_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


def safe_string(data: Dict[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    """Get a string field, normalizing blank strings to absent."""
    value = data.get(key) if isinstance(data, dict) else None
    if value is None:
        return default
    value = str(value)
    return value if value != "" else default


def safe_decimal(data: Dict[str, Any], key: str) -> Optional[Decimal]:
    value = safe_string(data, key)
    return to_decimal(value) if value is not None else None


def safe_integer(data: Dict[str, Any], key: str) -> Optional[int]:
    value = safe_string(data, key)
    return int(value) if value is not None else None


def omit_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove None values and empty strings from dictionary."""
    return {
        key: value for key, value in data.items()
        if value is not None and value != ""
    }


def iso8601_now() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    return iso8601(int(datetime.now(timezone.utc).timestamp() * 1000))


def iso8601(timestamp_ms: int) -> str:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{timestamp_ms % 1000:03d}Z"


def random_token(length: int = 16) -> str:
    """Random alphanumeric token."""
    return secrets.token_hex((length + 1) // 2)[:length]


def validate_client_order_id(client_order_id: str) -> bool:
    """Client order ids are 1-32 alphanumerics."""
    return (
        isinstance(client_order_id, str)
        and 0 < len(client_order_id) <= CLIENT_ORDER_ID_MAX_LENGTH
        and bool(_CLIENT_ORDER_ID_PATTERN.match(client_order_id))
    )


def validate_url(url: str) -> bool:
    """Validate URL format."""
    if not url or not isinstance(url, str):
        return False
    return url.startswith(("http://", "https://")) and "." in url
