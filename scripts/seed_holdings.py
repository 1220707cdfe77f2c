#!/usr/bin/env python3
"""
Store a sample UK/US/EU portfolio in the holdings database.

Usage: from project root:
  PYTHONPATH=src ./venv/bin/python scripts/seed_holdings.py
  PYTHONPATH=src ./venv/bin/python scripts/seed_holdings.py --refresh-defaults
"""

import argparse
import sys
from decimal import Decimal

from valuation_app.app_context import get_app_context
from valuation_app.domain.models import Holding
from valuation_app.repositories.sqlalchemy import SqlAlchemyHoldingsRepository
from valuation_app.repositories.sqlalchemy.database import get_session, init_db
from valuation_app.services import DefaultsUpdater, HoldingsService

# (name, ticker, exchange, shares)
SAMPLE_HOLDINGS = [
    ("Apple", "AAPL", "XNAS", 25),
    ("Microsoft", "MSFT", "XNAS", 10),
    ("Berkshire Hathaway B", "BRK.B", "XNYS", 8),
    ("Vodafone", "VOD", "XLON", 2500),
    ("HSBC", "HSBA", "XLON", 400),
    ("SAP", "SAP", "XETR", 12),
    ("LVMH", "MC", "XPAR", 3),
    ("Cash", "CASH", "", 5000),
]


def seed(refresh_defaults: bool) -> None:
    init_db()
    session = get_session()
    try:
        holdings_service = HoldingsService(SqlAlchemyHoldingsRepository(session))
        holdings = [
            Holding(name=name, ticker=ticker, exchange=exchange, shares=Decimal(shares))
            for name, ticker, exchange, shares in SAMPLE_HOLDINGS
        ]
        stored = holdings_service.replace_holdings(holdings)
        print(f"✓ Stored {len(stored)} holdings")

        if refresh_defaults:
            context = get_app_context()
            updater = DefaultsUpdater(context.prices, holdings_service)
            result = updater.refresh_stored()
            print(f"✓ Refreshed default prices for {result.updated_count} holdings")
            for h in result.holdings:
                price = f"{h.default_price}" if h.default_price is not None else "-"
                print(f"  {h.ticker:<8} {h.exchange:<5} {price}")
            context.close()
    finally:
        session.close()

    print("\nYou can now:")
    print("  - View holdings: GET /api/holdings")
    print("  - Value them:    POST /api/holdings/calc")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--refresh-defaults",
        action="store_true",
        help="fetch live prices and store them as default prices",
    )
    args = parser.parse_args()
    try:
        seed(args.refresh_defaults)
    except Exception as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
