"""User model"""

from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.sql import func

from .base import Base, UserRole

class User(Base):
    """A person who owns boards or works on tasks"""

    __tablename__ = "users"

    id = Column(String(50), primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.USER)

    created_at = Column(DateTime, nullable=False, default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}', role='{self.role.value}')>"
