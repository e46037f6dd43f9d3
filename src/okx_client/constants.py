"""
Constants for the OKX client.
"""

# API Configuration
DEFAULT_BASE_URL = "https://www.okx.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_MAX_RETRIES = 3

# Order attribution
DEFAULT_BROKER_ID = "6b9ad766b55dBCDE"
CLIENT_ORDER_ID_MAX_LENGTH = 32
CLIENT_ORDER_ID_TOKEN_LENGTH = 16
# synthesized ids are broker_id + token
BROKER_ID_MAX_LENGTH = CLIENT_ORDER_ID_MAX_LENGTH - CLIENT_ORDER_ID_TOKEN_LENGTH

# Pagination
DEFAULT_PAGINATION_CALLS = 10
DEFAULT_PAGE_SIZE = 100

# Markets
MARKET_TYPES = ("spot", "swap", "future", "option")
DEFAULT_OPTION_FAMILIES = ("BTC-USD", "ETH-USD")

# Wire sentinels
MARKET_PRICE_SENTINEL = "-1"
SUCCESS_CODE = "0"
PARTIAL_SUCCESS_CODE = "2"

# HTTP Status Codes
SUCCESS_STATUS_CODE = 200
ERROR_STATUS_CODE = 500
