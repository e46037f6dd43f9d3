#!/usr/bin/env python3
"""
Example: Place a BUY limit order on BTC/USDT with a stop-loss and a
take-profit attached, then cancel it.

This example demonstrates how to:
1. Create an authenticated client from environment variables
2. Place a limit order with protective legs attached
3. Refresh the order and cancel it
4. Handle classified errors

Prerequisites:
- Set OKX_API_KEY, OKX_API_SECRET and OKX_PASSPHRASE (or a .env file)
- Use demo trading (OKX_DEMO=1) unless you mean it

Usage:
    python examples/btc_buy_limit_order.py
"""

import asyncio
import logging
from decimal import Decimal

from okx_client import InsufficientFunds, InvalidOrder, OkxClient, OkxError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    """Place, refresh and cancel a protected limit order."""

    # Configuration
    SYMBOL = "BTC/USDT"
    PRICE = Decimal("20000.0")  # far below market, stays open
    AMOUNT = Decimal("0.0001")
    STOP_LOSS = Decimal("19000")
    TAKE_PROFIT = Decimal("25000")

    client = OkxClient.from_env(simulation=True)

    async with client:
        try:
            logger.info(f"Placing BUY limit order for {AMOUNT} {SYMBOL} at {PRICE}...")
            order = await client.create_order(
                SYMBOL,
                "limit",
                "buy",
                AMOUNT,
                PRICE,
                params={
                    "attach_protective": True,
                    "stop_loss_price": STOP_LOSS,
                    "take_profit_price": TAKE_PROFIT,
                },
            )
            logger.info(f"Order placed: id={order.id} client_order_id={order.client_order_id}")

            order = await client.fetch_order(order.id, SYMBOL)
            logger.info(f"Status: {order.status}, filled {order.filled} of {order.amount}")

            canceled = await client.cancel_order(order.id, SYMBOL)
            logger.info(f"Cancel acknowledged for {canceled.id}")

            order = await client.refresh_order(order)
            logger.info(f"Final status: {order.status}")

        except InsufficientFunds as e:
            logger.error(f"Not enough balance: {e}")
        except InvalidOrder as e:
            logger.error(f"Order rejected: {type(e).__name__}: {e}")
        except OkxError as e:
            logger.error(f"OKX error (retryable={e.retryable}): {e}")
            raise


if __name__ == "__main__":
    asyncio.run(main())
