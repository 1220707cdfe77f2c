"""Admin token check endpoint."""

from fastapi import APIRouter, Depends, Request

from valuation_app.api.deps import require_admin
from valuation_app.api.rate_limiter import api_limit
from valuation_app.api.schemas import AdminVerifyResponse

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/verify", response_model=AdminVerifyResponse, dependencies=[Depends(require_admin)])
@api_limit
def verify(request: Request) -> AdminVerifyResponse:
    """Confirm the caller's admin token."""
    return AdminVerifyResponse(ok=True)
