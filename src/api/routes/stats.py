"""Platform statistics route."""

from fastapi import APIRouter, Depends

from api.dependencies import get_mock_test_ledger, get_user_repo
from api.models import PlatformStatsResponse
from port.mock_test_ledger import MockTestLedger
from port.user_repository import UserRepository
from services.analytics_service import build_platform_stats

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=PlatformStatsResponse)
async def get_platform_stats(
    users: UserRepository = Depends(get_user_repo),
    ledger: MockTestLedger = Depends(get_mock_test_ledger),
):
    return PlatformStatsResponse.from_domain(build_platform_stats(users.list_all(), ledger))
