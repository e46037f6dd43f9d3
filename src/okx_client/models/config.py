"""
Configuration models for OKX client.

Immutable configuration structures following state-first design.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from ..constants import (
    BROKER_ID_MAX_LENGTH,
    DEFAULT_BASE_URL,
    DEFAULT_BROKER_ID,
    DEFAULT_MAX_RETRIES,
    DEFAULT_OPTION_FAMILIES,
    DEFAULT_PAGINATION_CALLS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
)

MARGIN_MODES = ("cross", "isolated")
TARGET_CURRENCIES = ("base", "quote")
PROTECTIVE_PRECEDENCE = ("structured", "discrete")


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for OKX client connection.

    Empty credentials are allowed for public-only use; signing a private
    request without them raises ``AuthenticationError``.
    """
    api_key: str = ""
    api_secret: str = ""
    passphrase: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    simulation: bool = False  # demo trading
    default_margin_mode: Optional[str] = None
    spot_margin: bool = False
    default_target_currency: str = "quote"
    broker_id: str = DEFAULT_BROKER_ID
    protective_precedence: Optional[str] = None
    hedged: bool = False
    pagination_calls: int = DEFAULT_PAGINATION_CALLS
    option_families: Tuple[str, ...] = DEFAULT_OPTION_FAMILIES

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_credentials()
        if self.default_margin_mode is not None and self.default_margin_mode not in MARGIN_MODES:
            raise ValueError(
                f"default_margin_mode must be one of {MARGIN_MODES}, got {self.default_margin_mode!r}"
            )
        if self.default_target_currency not in TARGET_CURRENCIES:
            raise ValueError(
                f"default_target_currency must be one of {TARGET_CURRENCIES}, "
                f"got {self.default_target_currency!r}"
            )
        if self.protective_precedence is not None and self.protective_precedence not in PROTECTIVE_PRECEDENCE:
            raise ValueError(
                f"protective_precedence must be one of {PROTECTIVE_PRECEDENCE}, "
                f"got {self.protective_precedence!r}"
            )
        if self.pagination_calls < 1:
            raise ValueError("pagination_calls must be positive")
        self._validate_broker_id()

    def _validate_credentials(self):
        """Validate API key and secret format when present."""
        for name in ("api_key", "api_secret"):
            value = getattr(self, name)
            if not value:
                continue
            if len(value) < 16:
                raise ValueError(
                    f"{name} appears to be too short (expected 16+ characters, got {len(value)})"
                )
            if len(value) > 128:
                raise ValueError(
                    f"{name} appears to be too long (expected max 128 characters, got {len(value)})"
                )

    def _validate_broker_id(self):
        """Broker ids prefix synthesized client order ids, which must stay short alphanumerics."""
        if not self.broker_id:
            return
        if not (self.broker_id.isascii() and self.broker_id.isalnum()):
            raise ValueError(f"broker_id must be alphanumeric, got {self.broker_id!r}")
        if len(self.broker_id) > BROKER_ID_MAX_LENGTH:
            raise ValueError(
                f"broker_id must be at most {BROKER_ID_MAX_LENGTH} characters, got {len(self.broker_id)}"
            )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret and self.passphrase)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionConfig":
        """Create from dictionary (e.g., from YAML config)."""
        allowed = {f.name for f in fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise ValueError(f"Unknown connection options: {sorted(unknown)}")
        values = dict(data)
        if "option_families" in values:
            values["option_families"] = tuple(values["option_families"])
        return cls(**values)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for transport-level retry behavior."""
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    backoff_factor: float = 2.0
    retry_on_status: tuple[int, ...] = (500, 502, 503, 504)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RetryConfig":
        values = dict(data)
        if "retry_on_status" in values:
            values["retry_on_status"] = tuple(values["retry_on_status"])
        return cls(**values)


def load_config(path: Union[str, Path]) -> Tuple[ConnectionConfig, RetryConfig]:
    """
    Load connection and retry configuration from a YAML file.

    Expected layout::

        connection:
          api_key: ...
          api_secret: ...
          passphrase: ...
          default_margin_mode: isolated
        retry:
          max_retries: 5

    Args:
        path: Path to the YAML file

    Returns:
        Tuple of (ConnectionConfig, RetryConfig)
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    connection = ConnectionConfig.from_dict(data.get("connection") or {})
    retry = RetryConfig.from_dict(data.get("retry") or {})
    return connection, retry
