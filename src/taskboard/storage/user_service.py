"""User service layer"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import User, UserRole
from .access import get_user_or_raise
from .base_service import BaseService
from .errors import InvalidInputError

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """Service class for user operations"""

    def create_user(self, name: str, email: str, role: UserRole = UserRole.USER) -> User:
        """Register a user; emails are unique and stored lower-cased"""
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name:
            raise InvalidInputError("User name is required")
        if not email or "@" not in email:
            raise InvalidInputError("A valid email is required")

        def work(session: Session) -> User:
            existing = session.execute(select(User.id).where(User.email == email)).first()
            if existing:
                raise InvalidInputError(f"User with email {email} already exists", code="USER_002")

            user = User(id=self._new_id(session, User), name=name, email=email, role=role)
            session.add(user)
            session.flush()
            session.refresh(user)
            logger.info("[CREATE_USER] %s (%s)", user.id, role.value)
            return user

        return self._run(work)

    def get_user(self, user_id: str) -> User:
        """Get user by ID"""
        return self._run(lambda session: get_user_or_raise(session, user_id))
