"""Task model"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Enum, ForeignKey, Index
from sqlalchemy.sql import func

from .base import Base, Priority

class Task(Base):
    """A task card; ordered among its column's tasks by ``order``"""

    __tablename__ = "tasks"

    # Primary fields
    id = Column(String(50), primary_key=True)
    column_id = Column(String(50), ForeignKey("columns.id"), nullable=False)
    board_id = Column(String(50), ForeignKey("boards.id"), nullable=False, index=True)
    title = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(Enum(Priority), nullable=False, default=Priority.LOW)
    assignee_id = Column(String(50), ForeignKey("users.id"), nullable=True)

    # Dense zero-based position among the column's tasks
    order = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('ix_tasks_column_order', 'column_id', 'order'),
    )

    def __repr__(self):
        return f"<Task(id='{self.id}', title='{self.title[:50]}', column='{self.column_id}', order={self.order})>"

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "column_id": self.column_id,
            "board_id": self.board_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "assignee_id": self.assignee_id,
            "order": self.order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
