"""
Pydantic schemas for the authenticated caller.
"""

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Caller identity taken from the bearer token claims."""
    username: str
    is_admin: bool = False
