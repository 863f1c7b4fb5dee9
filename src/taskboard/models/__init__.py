"""Taskboard models package"""

from .base import Base, UserRole, Priority
from .user import User
from .board import Board, BoardMember
from .column import BoardColumn
from .task import Task

__all__ = [
    "Base",
    "UserRole",
    "Priority",
    "User",
    "Board",
    "BoardMember",
    "BoardColumn",
    "Task"
]
