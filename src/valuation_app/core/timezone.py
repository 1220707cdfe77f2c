"""Timezone utilities for the reporting market (London)."""

from datetime import datetime

import pytz

REPORTING_TZ = pytz.timezone("Europe/London")


def now_reporting() -> datetime:
    """Return current time in the reporting timezone."""
    return datetime.now(REPORTING_TZ)
