"""Google OAuth 2.0 adapter.

Implements IdentityProvider with the authorization-code flow:
consent redirect → code exchange at the token endpoint → userinfo lookup.

Docs: https://developers.google.com/identity/protocols/oauth2/web-server
"""

import logging
from urllib.parse import urlencode

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import UpstreamAuthError
from domain.model.identity import ProfileClaims

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
GOOGLE_SCOPES = ("openid", "profile", "email")
API_TIMEOUT_SECONDS = 10.0


class GoogleOAuthAdapter:
    """Adapter that authenticates users against Google accounts."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self._transport = transport

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(GOOGLE_SCOPES),
            "state": state,
            "access_type": "online",
            "prompt": "select_account",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str, redirect_uri: str) -> ProfileClaims:
        """Exchange an authorization code for the user's Google profile.

        Raises:
            UpstreamAuthError: Google rejected the code, the network failed,
                or the profile is missing required fields.
        """
        try:
            async with httpx.AsyncClient(timeout=API_TIMEOUT_SECONDS, transport=self._transport) as client:
                token_response = await _post_with_retry(client, GOOGLE_TOKEN_URL, {
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": redirect_uri,
                    "grant_type": "authorization_code",
                })
                token_response.raise_for_status()
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise UpstreamAuthError("Token response did not include an access token")

                profile_response = await _get_with_retry(
                    client, GOOGLE_USERINFO_URL, {"Authorization": f"Bearer {access_token}"}
                )
                profile_response.raise_for_status()
                profile = profile_response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Google OAuth HTTP error",
                extra={"status_code": e.response.status_code, "url": str(e.request.url)},
            )
            raise UpstreamAuthError("Google rejected the authorization request") from e
        except httpx.RequestError as e:
            logger.warning("Google OAuth request error", extra={"error_type": type(e).__name__})
            raise UpstreamAuthError("Could not reach Google") from e
        except ValueError as e:
            logger.warning("Google OAuth returned invalid JSON", extra={"error": str(e)})
            raise UpstreamAuthError("Malformed response from Google") from e

        return parse_profile(profile)


def parse_profile(profile) -> ProfileClaims:
    """Map a Google userinfo document to ProfileClaims.

    Accepts both the OpenID (`sub`, `picture`) and legacy v2 (`id`) shapes.
    """
    if not isinstance(profile, dict):
        raise UpstreamAuthError("Malformed profile")

    provider_id = profile.get("sub") or profile.get("id")
    email = profile.get("email")
    if not provider_id or not email:
        logger.warning("Google profile missing id or email", extra={"fields": sorted(profile)})
        raise UpstreamAuthError("Malformed profile")

    return ProfileClaims(
        provider_id=str(provider_id),
        email=email,
        name=profile.get("name") or email,
        avatar=profile.get("picture"),
    )


# ── HTTP helpers ─────────────────────────────────────────────


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _post_with_retry(client: httpx.AsyncClient, url: str, data: dict) -> httpx.Response:
    """POST form data with automatic retry on transient failures."""
    return await client.post(url, data=data)


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _get_with_retry(client: httpx.AsyncClient, url: str, headers: dict) -> httpx.Response:
    """GET with automatic retry on transient failures."""
    return await client.get(url, headers=headers)
