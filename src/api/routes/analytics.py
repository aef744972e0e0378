"""Per-user analytics routes.

- GET /api/analytics: analytics for the authenticated user
- GET /api/analytics/{email}: analytics by email
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_user_repo
from api.models import AnalyticsResponse
from api.security import get_token_claims
from domain.model.identity import TokenClaims
from domain.model.user import User
from port.user_repository import UserRepository
from services.analytics_service import build_user_analytics

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def _analytics_or_404(user: User | None) -> AnalyticsResponse:
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return AnalyticsResponse.from_domain(build_user_analytics(user))


@router.get("", response_model=AnalyticsResponse)
async def get_my_analytics(
    claims: TokenClaims = Depends(get_token_claims),
    repo: UserRepository = Depends(get_user_repo),
):
    return _analytics_or_404(repo.get_by_id(claims.id))


@router.get("/{email}", response_model=AnalyticsResponse)
async def get_analytics_by_email(email: str, repo: UserRepository = Depends(get_user_repo)):
    return _analytics_or_404(repo.get_by_email(email))
