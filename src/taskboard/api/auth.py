"""Caller identity for API requests

Authentication itself is out of scope: the bearer token is taken to be the
user ID and only checked to name an existing user.
"""

from fastapi import Depends, Header, HTTPException

from ..models import User
from ..storage.errors import NotFoundError
from ..storage.user_service import UserService
from .providers import get_user_service


def get_current_user(
    authorization: str = Header(...),
    users: UserService = Depends(get_user_service),
) -> User:
    prefix = "Bearer "
    if not authorization.startswith(prefix):
        raise HTTPException(status_code=401, detail="invalid_token")
    user_id = authorization[len(prefix):].strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="invalid_token")

    try:
        return users.get_user(user_id)
    except NotFoundError:
        raise HTTPException(status_code=401, detail="invalid_token")
