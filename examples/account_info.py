#!/usr/bin/env python3
"""
Example: Fetch and display account information.

This example demonstrates how to:
1. Create an authenticated client from environment variables
2. Show trading and funding account balances
3. List open positions with P&L details
4. Show recent ledger entries and performance statistics

Prerequisites:
- Set OKX_API_KEY, OKX_API_SECRET and OKX_PASSPHRASE (or a .env file)
- Install okx-client in development mode: pip install -e .

Usage:
    python examples/account_info.py

Environment Variables:
    OKX_API_KEY=your_api_key_here
    OKX_API_SECRET=your_api_secret_here
    OKX_PASSPHRASE=your_passphrase_here
    OKX_DEMO=1  # optional, demo trading
"""

import asyncio
import logging
import os
from decimal import Decimal
from typing import Optional

from okx_client import OkxClient, OkxError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def format_decimal(value: Optional[Decimal], places: int = 8) -> str:
    if value is None:
        return "N/A"
    return f"{value:,.{places}f}"


def print_section_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f" {title.upper()} ".center(70, "="))
    print("=" * 70)


def print_balances(balances):
    """Print non-empty balances of one account."""
    print_section_header(f"{balances.account} balances")

    entries = [e for e in balances.entries.values() if e.total]
    if not entries:
        print("No balances found.")
        return

    print(f"{'Currency':<10} {'Free':>20} {'Used':>20} {'Total':>20}")
    print("-" * 72)
    for entry in sorted(entries, key=lambda e: e.currency):
        print(f"{entry.currency:<10} {format_decimal(entry.free):>20} "
              f"{format_decimal(entry.used):>20} {format_decimal(entry.total):>20}")


def print_positions(positions):
    """Print formatted positions table."""
    print_section_header(f"Open Positions ({len(positions)} total)")

    if not positions:
        print("No open positions found.")
        return

    print(f"{'Symbol':<28} {'Side':<6} {'Contracts':>10} {'Entry':>12} "
          f"{'Mark':>12} {'uPnL':>12} {'uPnL %':>8}")
    print("-" * 92)

    for position in sorted(positions, key=lambda p: p.symbol):
        print(f"{position.symbol:<28} {position.side or '-':<6} "
              f"{format_decimal(position.contracts, 0):>10} "
              f"{format_decimal(position.entry_price, 2):>12} "
              f"{format_decimal(position.mark_price, 2):>12} "
              f"{format_decimal(position.unrealized_pnl, 2):>12} "
              f"{format_decimal(position.percentage, 2):>8}")


def print_ledger(entries):
    """Print recent ledger entries."""
    print_section_header(f"Recent Ledger ({len(entries)} entries)")

    for entry in entries:
        sign = "-" if entry.direction == "out" else "+"
        print(f"{entry.timestamp or '':<15} {entry.currency or '':<8} "
              f"{sign}{format_decimal(entry.amount):<20} {entry.type or '':<10} {entry.symbol or ''}")


async def main():
    """Fetch and display account information."""
    try:
        logger.info("Creating client from environment variables...")
        client = OkxClient.from_env()
        logger.info(f"Client created (demo trading: {client.config.simulation})")

        async with client:
            await client.load_markets()

            print_balances(await client.fetch_balance("trading"))
            print_balances(await client.fetch_balance("funding"))

            positions = await client.fetch_positions()
            print_positions(positions)

            ledger = await client.fetch_ledger(limit=10)
            print_ledger(ledger)

            stats = client.get_statistics()
            print_section_header("Client Statistics")
            print(f"Requests:     {stats.total_requests}")
            print(f"Failed:       {stats.failed_requests}")
            print(f"Avg latency:  {stats.avg_duration_ms:.1f} ms")

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        logger.error("Please check your API credentials and environment variables")

    except OkxError as e:
        logger.error(f"OKX error: {type(e).__name__}: {e}")
        raise


if __name__ == "__main__":
    if not os.getenv("OKX_API_KEY") or not os.getenv("OKX_API_SECRET"):
        logger.warning("OKX_API_KEY and/or OKX_API_SECRET not set; a .env file will be tried")

    asyncio.run(main())
