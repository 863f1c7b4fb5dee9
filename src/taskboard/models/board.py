"""Board and board membership models"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from .base import Base

class Board(Base):
    """Board model: the aggregate root owning an ordered list of columns"""

    __tablename__ = "boards"

    id = Column(String(50), primary_key=True)
    title = Column(String(100), nullable=False)
    owner_id = Column(String(50), ForeignKey("users.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Board(id='{self.id}', title='{self.title[:50]}', owner='{self.owner_id}')>"

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "title": self.title,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class BoardMember(Base):
    """Membership of a user on a board they do not own"""

    __tablename__ = "board_members"

    # Composite primary key
    board_id = Column(String(50), ForeignKey("boards.id"), primary_key=True)
    user_id = Column(String(50), ForeignKey("users.id"), primary_key=True)

    created_at = Column(DateTime, nullable=False, default=func.now())

    __table_args__ = (
        UniqueConstraint('board_id', 'user_id', name='unique_board_member'),
    )

    def __repr__(self):
        return f"<BoardMember(board='{self.board_id}', user='{self.user_id}')>"
