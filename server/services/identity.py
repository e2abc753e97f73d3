"""Identity providers: who is issuing commands."""
from abc import ABC, abstractmethod
from typing import Optional
import logging

from pydantic import ValidationError

from config.settings import settings
from models.user import User
from utils.jwt_utils import decode_access_token

logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    """Resolves the current user from request credentials."""

    @abstractmethod
    async def current_user(self, token: Optional[str] = None) -> Optional[User]:
        ...


class StaticIdentityProvider(IdentityProvider):
    """Always resolves to one configured user. For development only."""

    def __init__(self, user: Optional[User] = None):
        self.user = user or User(
            id=settings.DEFAULT_USER_ID,
            email=settings.DEFAULT_USER_EMAIL,
            name=settings.DEFAULT_USER_NAME,
        )

    async def current_user(self, token: Optional[str] = None) -> Optional[User]:
        return self.user


class TokenIdentityProvider(IdentityProvider):
    """Resolves the user from a signed bearer JWT."""

    async def current_user(self, token: Optional[str] = None) -> Optional[User]:
        if not token:
            return None

        payload = decode_access_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            return User(
                id=payload["sub"],
                email=payload.get("email"),
                name=payload.get("name"),
            )
        except ValidationError as e:
            logger.warning(f"Token claims do not describe a user: {e}")
            return None


def build_identity_provider(mode: Optional[str] = None) -> IdentityProvider:
    mode = mode or settings.AUTH_MODE
    if mode == "jwt":
        return TokenIdentityProvider()
    if mode == "static":
        logger.warning("Using static identity provider; every request runs as the default user")
        return StaticIdentityProvider()
    raise ValueError(f"Unknown AUTH_MODE: {mode}")
