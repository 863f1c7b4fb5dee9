"""Column model"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from .base import Base

class BoardColumn(Base):
    """A column on a board; ordered among the board's columns by ``order``"""

    __tablename__ = "columns"

    id = Column(String(50), primary_key=True)
    board_id = Column(String(50), ForeignKey("boards.id"), nullable=False)
    title = Column(String(25), nullable=False)

    # Dense zero-based position among the board's columns
    order = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('ix_columns_board_order', 'board_id', 'order'),
    )

    def __repr__(self):
        return f"<BoardColumn(id='{self.id}', board='{self.board_id}', order={self.order})>"

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "board_id": self.board_id,
            "title": self.title,
            "order": self.order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
