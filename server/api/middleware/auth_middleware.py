"""Authentication dependency resolving the operator behind a request."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import logging

from core.dependencies import get_identity_provider
from models.user import User
from services.identity import IdentityProvider

logger = logging.getLogger(__name__)

# auto_error=False so the static provider works without any header
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> User:
    """
    Resolve the current user from the configured identity provider.

    Raises HTTPException if no identity can be established.
    """
    token = credentials.credentials if credentials else None
    user = await identity.current_user(token)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user
