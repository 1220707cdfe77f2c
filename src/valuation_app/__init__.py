"""Holdings valuation service."""
