"""Auth service: provider login business logic.

Pure business logic with no HTTP dependencies.
"""

import logging

from domain.model.identity import ProfileClaims
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def login_with_provider(repo: UserRepository, claims: ProfileClaims) -> User:
    """Sign a user in with verified provider claims.

    Creates the user on first login (role "student", zeroed aggregates);
    otherwise refreshes last_login. Keyed by the provider's subject id, so
    repeated logins never create duplicates.
    """
    user, created = repo.upsert(claims)
    if created:
        logger.info("New user registered", extra={"userId": user.id, "email": user.email})
    else:
        logger.info("User logged in", extra={"userId": user.id, "email": user.email})
    return user
