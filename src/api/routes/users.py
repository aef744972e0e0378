"""User routes.

- GET /api/user: current user (bearer token)
- GET /api/user/{email}: lookup by email
- GET /api/students: all users, public fields only
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_user_repo
from api.models import StudentResponse, UserResponse
from api.security import get_token_claims
from domain.model.identity import TokenClaims
from port.user_repository import UserRepository

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/user", response_model=UserResponse)
async def get_current_user(
    claims: TokenClaims = Depends(get_token_claims),
    repo: UserRepository = Depends(get_user_repo),
):
    user = repo.get_by_id(claims.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_domain(user)


@router.get("/user/{email}", response_model=UserResponse)
async def get_user_by_email(email: str, repo: UserRepository = Depends(get_user_repo)):
    user = repo.get_by_email(email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_domain(user)


@router.get("/students", response_model=list[StudentResponse])
async def list_students(repo: UserRepository = Depends(get_user_repo)):
    return [StudentResponse.from_domain(user) for user in repo.list_all()]
