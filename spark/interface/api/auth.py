"""Session cookie authentication helpers for routes."""

from typing import Optional

from spark.domain.service import JWTService
from spark.interface.error import UnauthenticatedError


def optional_user_id(jwt_service: JWTService, auth_token: Optional[str]) -> Optional[str]:
    """User ID from the session cookie, or None for anonymous requests."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    return str(user_id) if user_id else None


def require_user_id(
    jwt_service: JWTService,
    auth_token: Optional[str],
    action: str = "perform this action",
) -> str:
    """User ID from the session cookie.

    Raises:
        UnauthenticatedError: If the cookie is missing, expired or invalid
    """
    user_id = optional_user_id(jwt_service, auth_token)
    if not user_id:
        raise UnauthenticatedError(f"Authentication required to {action}")
    return user_id
