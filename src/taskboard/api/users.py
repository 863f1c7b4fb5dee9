"""Users API endpoints"""

from fastapi import APIRouter, Depends

from ..models import User, UserRole
from ..storage.errors import BoardError
from ..storage.user_service import UserService
from .auth import get_current_user
from .errors import http_error
from .providers import get_user_service
from .schemas import UserCreate, UserResponse

router = APIRouter()

@router.post("/", response_model=UserResponse, status_code=201)
def create_user(user_data: UserCreate, users: UserService = Depends(get_user_service)):
    """Register a user"""

    try:
        user = users.create_user(name=user_data.name, email=user_data.email, role=UserRole.USER)
    except BoardError as e:
        raise http_error(e)

    return UserResponse.model_validate(user)

@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """The user the request is made as"""
    return UserResponse.model_validate(current_user)
