"""Leaderboard route."""

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repo
from api.models import LeaderboardEntryResponse
from port.user_repository import UserRepository
from services.analytics_service import build_leaderboard

router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.get("/leaderboard", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(repo: UserRepository = Depends(get_user_repo)):
    """Top 20 users with at least one test, by average score."""
    return [LeaderboardEntryResponse.from_domain(e) for e in build_leaderboard(repo.list_all())]
