"""Lookup and authorization checks shared by the use-case services

The policy is pass/fail only: admins and board owners may manage a board,
members may additionally read it and work on its tasks.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Board, BoardMember, User
from .errors import AccessDeniedError, NotFoundError, BOARD_NOT_FOUND, USER_NOT_FOUND


def get_user_or_raise(session: Session, user_id: str) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found", code=USER_NOT_FOUND)
    return user


def get_board_or_raise(session: Session, board_id: str) -> Board:
    board = session.get(Board, board_id)
    if board is None:
        raise NotFoundError(f"Board {board_id} not found", code=BOARD_NOT_FOUND)
    return board


def is_board_member(session: Session, board_id: str, user_id: str) -> bool:
    return session.execute(
        select(BoardMember.user_id).where(
            BoardMember.board_id == board_id,
            BoardMember.user_id == user_id,
        )
    ).first() is not None


def can_manage_board(user: User, board: Board) -> bool:
    return user.is_admin or board.owner_id == user.id


def ensure_board_manager(user: User, board: Board, action: str = "manage this board"):
    """Only admins or the board owner may pass"""
    if not can_manage_board(user, board):
        raise AccessDeniedError(f"Only an admin or the board owner can {action}")


def ensure_board_access(session: Session, user: User, board: Board):
    """Admins, the owner and board members may pass"""
    if can_manage_board(user, board) or is_board_member(session, board.id, user.id):
        return
    raise AccessDeniedError("Board access denied")
