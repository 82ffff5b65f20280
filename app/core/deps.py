"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and expose the caller's
token claims. Failures raise the application errors, so they come back in
the same JSON envelope as everything else.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Optional

from app.core.errors import Forbidden, Unauthorized
from app.core.security import decode_token
from app.schemas.user import CurrentUser

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error is off so a missing header becomes our 401, not Starlette's 403
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Require a valid bearer token ("is logged in").

    Raises:
        Unauthorized: If the token is missing, invalid, expired, or has no username
    """
    if credentials is None:
        raise Unauthorized()

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise Unauthorized()

    username = payload.get("username")
    if not username:
        raise Unauthorized()

    return CurrentUser(username=username, is_admin=bool(payload.get("isAdmin", False)))


def get_admin_user(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """
    Require a valid bearer token with isAdmin set ("is admin").

    Raises:
        Unauthorized: No valid token
        Forbidden: Valid token, not an admin
    """
    if not user.is_admin:
        raise Forbidden("Admin privileges required")
    return user
