"""Per-client request limit shared by every /api route."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from valuation_app.config.settings import get_settings

# Rate limiter instance - shared across routers
limiter = Limiter(key_func=get_remote_address)

# One bucket per client for the whole API, re-read from settings on each request
api_limit = limiter.shared_limit(lambda: get_settings().api_rate_limit, scope="api")
