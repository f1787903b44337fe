"""Authentication utilities for bearer token verification."""
import logging
from typing import Optional

from fastapi import Header

from core.errors import AuthError
from core.supabase import get_supabase
from models.user import CurrentUser

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def get_current_user(authorization: Optional[str] = Header(None)) -> CurrentUser:
    """
    Dependency to get the current authenticated user from the bearer token.

    Args:
        authorization: Raw Authorization header

    Returns:
        CurrentUser resolved by Supabase auth

    Raises:
        AuthError: If the header is missing or the token cannot be verified
    """
    if not authorization:
        logger.warning("Missing Authorization header")
        raise AuthError("Missing authentication")

    token = extract_bearer_token(authorization)
    if not token:
        logger.warning("Malformed Authorization header")
        raise AuthError("Invalid authentication")

    # Resolved after the header checks so a missing header is always a 401
    supabase = get_supabase()

    try:
        user_response = supabase.auth.get_user(token)
    except Exception as e:
        logger.warning("Authentication failed: %s", e)
        raise AuthError("Invalid authentication") from e

    if not user_response or not user_response.user:
        logger.warning("Authentication failed: no user for token")
        raise AuthError("Invalid authentication")

    user = user_response.user
    return CurrentUser(id=str(user.id), access_token=token)
