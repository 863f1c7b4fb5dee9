"""Service providers injected into route handlers"""

from ..storage.board_service import BoardService
from ..storage.column_service import ColumnService
from ..storage.database import get_session_factory
from ..storage.task_service import TaskService
from ..storage.user_service import UserService


def get_user_service() -> UserService:
    return UserService(get_session_factory())


def get_board_service() -> BoardService:
    return BoardService(get_session_factory())


def get_column_service() -> ColumnService:
    return ColumnService(get_session_factory())


def get_task_service() -> TaskService:
    return TaskService(get_session_factory())
