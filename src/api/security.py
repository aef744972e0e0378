"""JWT bearer tokens and authentication dependencies."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from api.config import get_settings
from domain.model.errors import InvalidTokenError, MissingTokenError
from domain.model.identity import TokenClaims
from domain.model.user import User

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = 7

security = HTTPBearer(auto_error=False)


def create_access_token(user: User, issued_at: datetime | None = None) -> str:
    """Create a signed JWT carrying the user's id, email and role."""
    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=JWT_EXPIRATION_DAYS),
    }
    return jwt.encode(payload, get_settings().jwt_secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """Verify signature and expiry, and return the token claims.

    Raises:
        InvalidTokenError: bad signature, expired, or missing claims
    """
    try:
        payload = jwt.decode(token, get_settings().jwt_secret, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        raise InvalidTokenError("Invalid token") from e

    try:
        return TokenClaims(id=payload["id"], email=payload["email"], role=payload["role"])
    except KeyError as e:
        raise InvalidTokenError("Invalid token") from e


def verify_credentials(credentials: Optional[HTTPAuthorizationCredentials]) -> TokenClaims:
    """Verify an optional bearer credential.

    Raises:
        MissingTokenError: no bearer token presented
        InvalidTokenError: token failed verification
    """
    if not credentials or not credentials.credentials:
        raise MissingTokenError("Access token required")
    return decode_access_token(credentials.credentials)


def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenClaims:
    """Require a valid bearer token. 401 when absent, 403 when invalid."""
    try:
        return verify_credentials(credentials)
    except MissingTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        )
