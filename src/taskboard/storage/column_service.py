"""Column service layer for business logic"""

import logging
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Board, BoardColumn, Task
from .access import ensure_board_access, ensure_board_manager, get_board_or_raise, get_user_or_raise
from .base_service import BaseService
from .errors import (
    ColumnNotEmptyError,
    InvalidInputError,
    NotFoundError,
    BOARD_NOT_FOUND,
    COLUMN_NOT_FOUND,
)
from .ordering import OrderedListStore

logger = logging.getLogger(__name__)

MAX_COLUMN_TITLE = 25


def column_ordering() -> OrderedListStore:
    """Columns ordered under their board; boards are aggregate roots"""
    return OrderedListStore(
        BoardColumn,
        parent_field="board_id",
        parent_model=Board,
        sibling_code=COLUMN_NOT_FOUND,
        parent_code=BOARD_NOT_FOUND,
    )


def _validate_column_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise InvalidInputError("Column title cannot be empty")
    if len(title) > MAX_COLUMN_TITLE:
        raise InvalidInputError(f"Column title must not exceed {MAX_COLUMN_TITLE} characters")
    return title.strip()


def get_column_or_raise(session: Session, column_id: str) -> BoardColumn:
    column = session.get(BoardColumn, column_id)
    if column is None:
        raise NotFoundError(f"Column {column_id} not found", code=COLUMN_NOT_FOUND)
    return column


class ColumnService(BaseService):
    """Service class for column operations"""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None,
                 ordering: Optional[OrderedListStore] = None, config: Optional[dict] = None):
        super().__init__(session_factory, config)
        self.ordering = ordering or column_ordering()

    def create_column(self, user_id: str, board_id: str, title: str) -> BoardColumn:
        """Create a column as the last column of the board"""
        title = _validate_column_title(title)

        def work(session: Session) -> BoardColumn:
            user = get_user_or_raise(session, user_id)
            board = get_board_or_raise(session, board_id)
            ensure_board_manager(user, board, "create columns")

            column = BoardColumn(id=self._new_id(session, BoardColumn), title=title)
            self.ordering.insert(session, board_id, column)
            session.refresh(column)
            return column

        return self._run(work)

    def list_columns(self, user_id: str, board_id: str) -> List[BoardColumn]:
        def work(session: Session) -> List[BoardColumn]:
            user = get_user_or_raise(session, user_id)
            board = get_board_or_raise(session, board_id)
            ensure_board_access(session, user, board)
            return self.ordering.siblings(session, board_id)

        return self._run(work)

    def update_column(self, user_id: str, column_id: str, title: str) -> BoardColumn:
        """Rename a column; its position is only changed through ``move_column``"""
        title = _validate_column_title(title)

        def work(session: Session) -> BoardColumn:
            user = get_user_or_raise(session, user_id)
            column = get_column_or_raise(session, column_id)
            board = get_board_or_raise(session, column.board_id)
            ensure_board_manager(user, board, "update columns")

            column.title = title
            session.flush()
            session.refresh(column)
            return column

        return self._run(work)

    def move_column(self, user_id: str, column_id: str, new_order: int) -> BoardColumn:
        """Drag a column to ``new_order`` among its board's columns"""
        if new_order is None:
            raise InvalidInputError("New order must be provided")

        def work(session: Session) -> BoardColumn:
            user = get_user_or_raise(session, user_id)
            column = get_column_or_raise(session, column_id)
            board = get_board_or_raise(session, column.board_id)
            ensure_board_manager(user, board, "move columns")

            column = self.ordering.move_within_parent(session, column_id, board.id, new_order)
            session.refresh(column)
            return column

        return self._run(work)

    def delete_column(self, user_id: str, column_id: str) -> None:
        """Delete an empty column and close the gap it leaves"""

        def work(session: Session) -> None:
            user = get_user_or_raise(session, user_id)
            column = get_column_or_raise(session, column_id)
            board = get_board_or_raise(session, column.board_id)
            ensure_board_manager(user, board, "delete columns")

            has_tasks = session.execute(
                select(Task.id).where(Task.column_id == column_id).limit(1)
            ).first()
            if has_tasks:
                raise ColumnNotEmptyError(
                    f"Cannot delete column {column_id}: it still has tasks. Move or delete them first."
                )

            self.ordering.remove(session, column_id, board.id)

        self._run(work)
