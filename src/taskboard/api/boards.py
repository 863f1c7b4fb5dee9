"""Boards API endpoints"""

from fastapi import APIRouter, Depends
from typing import List

from ..models import User
from ..storage.board_service import BoardService
from ..storage.errors import BoardError
from .auth import get_current_user
from .errors import http_error
from .providers import get_board_service
from .schemas import (
    BoardCreate,
    BoardUpdate,
    BoardResponse,
    BoardDetailResponse,
    MembersAdd,
    MembersResponse,
    SuccessResponse
)

router = APIRouter()

@router.post("/", response_model=BoardResponse, status_code=201)
def create_board(
    board_data: BoardCreate,
    current_user: User = Depends(get_current_user),
    boards: BoardService = Depends(get_board_service)
):
    """Create a board owned by the caller"""

    try:
        board = boards.create_board(current_user.id, board_data.title)
    except BoardError as e:
        raise http_error(e)

    return BoardResponse.model_validate(board)

@router.get("/", response_model=List[BoardResponse])
def list_boards(
    current_user: User = Depends(get_current_user),
    boards: BoardService = Depends(get_board_service)
):
    """Boards the caller owns or is a member of"""

    try:
        return [BoardResponse.model_validate(board) for board in boards.list_boards(current_user.id)]
    except BoardError as e:
        raise http_error(e)

@router.get("/{board_id}", response_model=BoardDetailResponse)
def get_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    boards: BoardService = Depends(get_board_service)
):
    """Board with its columns and tasks in display order"""

    try:
        return BoardDetailResponse.model_validate(boards.get_board(current_user.id, board_id))
    except BoardError as e:
        raise http_error(e)

@router.patch("/{board_id}", response_model=BoardResponse)
def update_board(
    board_id: str,
    board_data: BoardUpdate,
    current_user: User = Depends(get_current_user),
    boards: BoardService = Depends(get_board_service)
):
    try:
        board = boards.update_board(current_user.id, board_id, board_data.title)
    except BoardError as e:
        raise http_error(e)

    return BoardResponse.model_validate(board)

@router.delete("/{board_id}", response_model=SuccessResponse)
def delete_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    boards: BoardService = Depends(get_board_service)
):
    """Delete a board with all its columns and tasks"""

    try:
        boards.delete_board(current_user.id, board_id)
    except BoardError as e:
        raise http_error(e)

    return SuccessResponse(message=f"Board {board_id} deleted successfully", id=board_id)

@router.post("/{board_id}/members", response_model=MembersResponse)
def add_members(
    board_id: str,
    members_data: MembersAdd,
    current_user: User = Depends(get_current_user),
    boards: BoardService = Depends(get_board_service)
):
    try:
        members = boards.add_members(current_user.id, board_id, members_data.members)
    except BoardError as e:
        raise http_error(e)

    return MembersResponse(board_id=board_id, members=members)

@router.delete("/{board_id}/members/{member_id}", response_model=SuccessResponse)
def remove_member(
    board_id: str,
    member_id: str,
    current_user: User = Depends(get_current_user),
    boards: BoardService = Depends(get_board_service)
):
    try:
        boards.remove_member(current_user.id, board_id, member_id)
    except BoardError as e:
        raise http_error(e)

    return SuccessResponse(message=f"Member {member_id} removed", id=board_id)
