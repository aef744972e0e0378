"""Authentication routes (Google OAuth handshake, logout).

Flow:
    Browser → GET /auth/google → 302 to Google consent (state kept in session cookie)
    Google  → GET /auth/google/callback?code&state → upsert user → issue JWT
            → 302 to FRONTEND_URL?token=...&user=...
    Any failure → 302 to FRONTEND_URL?error=auth_failed
"""

import json
import logging
import secrets
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from api.config import Settings, get_settings
from api.dependencies import get_identity_provider, get_user_repo
from api.models import LogoutResponse
from api.security import create_access_token
from domain.model.errors import DomainError, UpstreamAuthError
from domain.model.user import User
from port.identity_provider import IdentityProvider
from port.user_repository import UserRepository
from services.auth_service import login_with_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

STATE_SESSION_KEY = "oauth_state"
USER_SESSION_KEY = "user_id"


def _callback_url(request: Request, settings: Settings) -> str:
    """Absolute callback URL; relative settings resolve against the request host."""
    configured = settings.google_callback_url
    if configured.startswith(("http://", "https://")):
        return configured
    return str(request.base_url).rstrip("/") + "/" + configured.lstrip("/")


def _encode_component(value: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(value, safe="!*'()")


def _success_redirect(frontend_url: str, token: str, user: User) -> str:
    user_payload = json.dumps({
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar,
        "totalTests": user.total_tests,
        "averageScore": user.average_score,
    }, separators=(",", ":"))
    return f"{frontend_url}?token={token}&user={_encode_component(user_payload)}"


def _failure_redirect(frontend_url: str) -> RedirectResponse:
    return RedirectResponse(f"{frontend_url}?error=auth_failed", status_code=302)


@router.get("/google")
async def google_login(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
):
    """Start the OAuth handshake (scopes: profile, email)."""
    state = secrets.token_urlsafe(24)
    request.session[STATE_SESSION_KEY] = state
    url = provider.authorization_url(_callback_url(request, settings), state)
    return RedirectResponse(url, status_code=302)


@router.get("/google/callback")
async def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    provider: IdentityProvider = Depends(get_identity_provider),
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    """Finish the handshake and hand a bearer token to the frontend."""
    expected_state = request.session.pop(STATE_SESSION_KEY, None)

    try:
        if error:
            raise UpstreamAuthError(f"Provider returned error: {error}")
        if not state or not expected_state or not secrets.compare_digest(state, expected_state):
            raise UpstreamAuthError("OAuth state mismatch")
        if not code:
            raise UpstreamAuthError("Missing authorization code")

        claims = await provider.fetch_profile(code, _callback_url(request, settings))
        user = login_with_provider(repo, claims)
    except DomainError as e:
        logger.warning("OAuth login failed", extra={"reason": str(e)})
        return _failure_redirect(settings.frontend_url)

    request.session[USER_SESSION_KEY] = user.id
    token = create_access_token(user)
    return RedirectResponse(_success_redirect(settings.frontend_url, token, user), status_code=302)


@router.get("/logout", response_model=LogoutResponse)
async def logout(request: Request):
    """Clear the server-side login session. Issued bearer tokens stay valid until expiry."""
    request.session.clear()
    return LogoutResponse()
