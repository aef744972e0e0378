from typing import Protocol

from domain.model.identity import ProfileClaims


class IdentityProvider(Protocol):
    """Protocol for a redirect-based external identity provider (OAuth 2.0)."""
    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Return the provider URL the browser is sent to for consent."""
        ...

    async def fetch_profile(self, code: str, redirect_uri: str) -> ProfileClaims:
        """Exchange an authorization code for the user's profile claims.

        Raises UpstreamAuthError on denial, network failure or malformed profile.
        """
        ...
