"""
Symbol Info Example - Demonstrates market cache warmup and market lookup.

This example demonstrates how to:
1. Use the OkxPublicClient with cache warmup
2. Display market metadata for BTC/USDT and its perpetual swap
3. Show that concurrent loads share a single venue request
4. Fetch a ticker and a small order book

Prerequisites:
- No API keys required (public endpoints only)
- Internet connection to access the OKX API
"""

import asyncio
import logging
import time

from okx_client import BadSymbol, OkxPublicClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def display_market(market):
    """Display market metadata in a formatted way."""
    print("\n" + "=" * 70)
    print(f"MARKET: {market.symbol} ({market.id})")
    print("=" * 70)

    print(f"   Type:                {market.type}")
    print(f"   Base / Quote:        {market.base} / {market.quote}")
    print(f"   Settle:              {market.settle or 'N/A'}")
    print(f"   Active:              {market.active}")
    if market.contract:
        print(f"   Linear:              {market.linear}")
        print(f"   Contract Size:       {market.contract_size}")
    else:
        print(f"   Margin Trading:      {market.margin}")

    print(f"   Amount Step:         {market.precision.amount}")
    print(f"   Price Tick:          {market.precision.price}")
    print(f"   Min Amount:          {market.limits.amount.min}")
    print(f"   Max Leverage:        {market.limits.leverage.max}")


async def example_with_auto_warmup():
    """
    Example 1: Using auto_warmup (default behavior)

    Entering the client as a context manager loads every market once.
    """
    logger.info("Example 1: Auto Warmup")

    start_time = time.time()
    async with OkxPublicClient(option_families=()) as client:
        markets = await client.load_markets()
        logger.info(f"Cache warmed up with {len(markets)} markets in {time.time() - start_time:.2f}s")

        for symbol in ("BTC/USDT", "BTC/USDT:USDT"):
            try:
                display_market(client.markets.market(symbol))
            except BadSymbol as e:
                logger.error(f"Lookup failed: {e}")


async def example_single_flight():
    """
    Example 2: Concurrent loads

    Many coroutines asking for markets at once trigger one venue load.
    """
    logger.info("Example 2: Concurrent loads share one request")

    async with OkxPublicClient(auto_warmup=False, option_families=()) as client:
        start_time = time.time()
        results = await asyncio.gather(*(client.load_markets() for _ in range(10)))
        same = all(result is results[0] for result in results)
        logger.info(f"10 concurrent loads finished in {time.time() - start_time:.2f}s (shared result: {same})")


async def example_market_data():
    """Example 3: Ticker and order book."""
    logger.info("Example 3: Market data")

    async with OkxPublicClient(auto_warmup=False, option_families=()) as client:
        ticker = await client.fetch_ticker("BTC/USDT")
        logger.info(f"BTC/USDT last={ticker.get('last')} bid={ticker.get('bidPx')} ask={ticker.get('askPx')}")

        book = await client.fetch_order_book("BTC/USDT", limit=5)
        for price, size, *_ in book["asks"][:3]:
            logger.info(f"  ask {price} x {size}")


async def main():
    """Run all examples."""
    await example_with_auto_warmup()
    await example_single_flight()
    await example_market_data()


if __name__ == "__main__":
    asyncio.run(main())
