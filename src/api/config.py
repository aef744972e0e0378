"""Environment-driven settings.

Values are read when `get_settings()` is first called, after `load_dotenv()`
has run in `api.main`.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_SESSION_SECRET = 'levelup-session-fallback'
DEFAULT_JWT_SECRET = 'fallback-jwt-secret'
DEFAULT_FRONTEND_URL = 'https://app.legalight.org.in'
DEFAULT_CORS_ORIGINS = 'https://app.legalight.org.in,http://localhost:3000'
DEFAULT_CALLBACK_URL = '/auth/google/callback'


@dataclass(frozen=True)
class Settings:
    google_client_id: str | None
    google_client_secret: str | None
    google_callback_url: str
    session_secret: str
    jwt_secret: str
    frontend_url: str
    port: int
    environment: str
    cors_origins: list[str]

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    def missing_required(self) -> list[str]:
        """Names of required variables that are not set."""
        missing = []
        if not self.google_client_id:
            missing.append('GOOGLE_CLIENT_ID')
        if not self.google_client_secret:
            missing.append('GOOGLE_CLIENT_SECRET')
        return missing


def load_settings() -> Settings:
    return Settings(
        google_client_id=os.getenv('GOOGLE_CLIENT_ID'),
        google_client_secret=os.getenv('GOOGLE_CLIENT_SECRET'),
        google_callback_url=os.getenv('GOOGLE_CALLBACK_URL', DEFAULT_CALLBACK_URL),
        session_secret=os.getenv('SESSION_SECRET') or DEFAULT_SESSION_SECRET,
        jwt_secret=os.getenv('JWT_SECRET') or DEFAULT_JWT_SECRET,
        frontend_url=os.getenv('FRONTEND_URL') or DEFAULT_FRONTEND_URL,
        port=int(os.getenv('PORT', 3000)),
        environment=os.getenv('NODE_ENV') or os.getenv('ENVIRONMENT') or 'development',
        cors_origins=[
            origin.strip()
            for origin in os.getenv('CORS_ORIGINS', DEFAULT_CORS_ORIGINS).split(',')
            if origin.strip()
        ],
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
