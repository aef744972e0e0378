"""Scripted implementation of IdentityProvider for testing."""

from urllib.parse import urlencode

from domain.model.errors import UpstreamAuthError
from domain.model.identity import ProfileClaims

FAKE_AUTH_URL = "https://identity.test/authorize"


class FakeIdentityProvider:
    def __init__(self, profiles: dict[str, ProfileClaims] | None = None):
        # authorization code → profile returned for it
        self.profiles: dict[str, ProfileClaims] = dict(profiles or {})
        self.exchanged: list[tuple[str, str]] = []

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        return f"{FAKE_AUTH_URL}?{urlencode({'redirect_uri': redirect_uri, 'state': state})}"

    async def fetch_profile(self, code: str, redirect_uri: str) -> ProfileClaims:
        self.exchanged.append((code, redirect_uri))
        profile = self.profiles.get(code)
        if profile is None:
            raise UpstreamAuthError("Unknown authorization code")
        return profile
