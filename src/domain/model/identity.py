from dataclasses import dataclass


@dataclass(frozen=True)
class ProfileClaims:
    """Profile returned by the identity provider after a successful handshake."""
    provider_id: str
    email: str
    name: str
    avatar: str | None = None


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a verified bearer token."""
    id: str
    email: str
    role: str
