"""Board service layer for business logic"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from ..models import Board, BoardMember, BoardColumn, Task
from .access import (
    ensure_board_access,
    ensure_board_manager,
    get_board_or_raise,
    get_user_or_raise,
    is_board_member,
)
from .base_service import BaseService
from .errors import InvalidInputError, NotFoundError, BOARD_NOT_FOUND, USER_NOT_FOUND

logger = logging.getLogger(__name__)

MAX_BOARD_TITLE = 100


def _validate_board_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise InvalidInputError("Title is required to create a board")
    if len(title) > MAX_BOARD_TITLE:
        raise InvalidInputError(f"Board title must not exceed {MAX_BOARD_TITLE} characters")
    return title.strip()


class BoardService(BaseService):
    """Service class for board operations"""

    def create_board(self, user_id: str, title: str) -> Board:
        """Create a board owned by ``user_id``"""
        title = _validate_board_title(title)

        def work(session: Session) -> Board:
            owner = get_user_or_raise(session, user_id)
            board = Board(id=self._new_id(session, Board), title=title, owner_id=owner.id)
            session.add(board)
            session.flush()
            session.refresh(board)
            logger.info("[CREATE_BOARD] %s owned by %s", board.id, owner.id)
            return board

        return self._run(work)

    def list_boards(self, user_id: str) -> List[Board]:
        """Boards the user owns or is a member of"""

        def work(session: Session) -> List[Board]:
            get_user_or_raise(session, user_id)
            member_of = select(BoardMember.board_id).where(BoardMember.user_id == user_id)
            return list(
                session.execute(
                    select(Board)
                    .where(or_(Board.owner_id == user_id, Board.id.in_(member_of)))
                    .order_by(Board.created_at)
                ).scalars()
            )

        return self._run(work)

    def get_board(self, user_id: str, board_id: str) -> Dict[str, Any]:
        """Board with its columns and each column's tasks, all in order"""

        def work(session: Session) -> Dict[str, Any]:
            user = get_user_or_raise(session, user_id)
            board = get_board_or_raise(session, board_id)
            ensure_board_access(session, user, board)

            columns = session.execute(
                select(BoardColumn).where(BoardColumn.board_id == board_id).order_by(BoardColumn.order)
            ).scalars().all()
            tasks = session.execute(
                select(Task).where(Task.board_id == board_id).order_by(Task.column_id, Task.order)
            ).scalars().all()
            members = session.execute(
                select(BoardMember.user_id).where(BoardMember.board_id == board_id)
            ).scalars().all()

            tasks_by_column: Dict[str, List[Dict[str, Any]]] = {}
            for task in tasks:
                tasks_by_column.setdefault(task.column_id, []).append(task.to_dict())

            populated = board.to_dict()
            populated["members"] = list(members)
            populated["columns"] = []
            for column in columns:
                column_data = column.to_dict()
                column_data["tasks"] = tasks_by_column.get(column.id, [])
                populated["columns"].append(column_data)
            return populated

        return self._run(work)

    def update_board(self, user_id: str, board_id: str, title: str) -> Board:
        title = _validate_board_title(title)

        def work(session: Session) -> Board:
            user = get_user_or_raise(session, user_id)
            board = get_board_or_raise(session, board_id)
            ensure_board_manager(user, board, "update the board")
            board.title = title
            session.flush()
            session.refresh(board)
            return board

        return self._run(work)

    def delete_board(self, user_id: str, board_id: str) -> None:
        """Delete a board together with its columns, tasks and memberships"""

        def work(session: Session) -> None:
            user = get_user_or_raise(session, user_id)
            board = get_board_or_raise(session, board_id)
            ensure_board_manager(user, board, "delete the board")

            tasks = session.execute(delete(Task).where(Task.board_id == board_id)).rowcount
            columns = session.execute(delete(BoardColumn).where(BoardColumn.board_id == board_id)).rowcount
            session.execute(delete(BoardMember).where(BoardMember.board_id == board_id))
            result = session.execute(delete(Board).where(Board.id == board_id))

            # Deleted concurrently by another request
            if result.rowcount == 0:
                raise NotFoundError(f"Board {board_id} not found", code=BOARD_NOT_FOUND)

            logger.info("[DELETE_BOARD] %s removed with %d columns and %d tasks", board_id, columns, tasks)

        self._run(work)

    def add_members(self, user_id: str, board_id: str, member_ids: List[str]) -> List[str]:
        """Add users to a board; returns the full member list"""
        if not member_ids:
            raise InvalidInputError("At least one member is required")

        def work(session: Session) -> List[str]:
            user = get_user_or_raise(session, user_id)
            board = get_board_or_raise(session, board_id)
            ensure_board_manager(user, board, "add members")

            for member_id in dict.fromkeys(member_ids):
                get_user_or_raise(session, member_id)
                if member_id == board.owner_id or is_board_member(session, board_id, member_id):
                    continue
                session.add(BoardMember(board_id=board_id, user_id=member_id))
            session.flush()

            return list(
                session.execute(
                    select(BoardMember.user_id).where(BoardMember.board_id == board_id)
                ).scalars()
            )

        return self._run(work)

    def remove_member(self, user_id: str, board_id: str, member_id: str) -> None:
        def work(session: Session) -> None:
            user = get_user_or_raise(session, user_id)
            board = get_board_or_raise(session, board_id)
            ensure_board_manager(user, board, "remove members")

            result = session.execute(
                delete(BoardMember).where(
                    BoardMember.board_id == board_id,
                    BoardMember.user_id == member_id,
                )
            )
            if result.rowcount == 0:
                raise NotFoundError(f"User {member_id} is not a member of board {board_id}", code=USER_NOT_FOUND)

        self._run(work)
