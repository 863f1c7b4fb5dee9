"""Columns API endpoints"""

from fastapi import APIRouter, Depends, Query
from typing import List

from ..models import User
from ..storage.column_service import ColumnService
from ..storage.errors import BoardError
from .auth import get_current_user
from .errors import http_error
from .providers import get_column_service
from .schemas import (
    ColumnCreate,
    ColumnUpdate,
    ColumnMove,
    ColumnResponse,
    SuccessResponse
)

router = APIRouter()

@router.post("/", response_model=ColumnResponse, status_code=201)
def create_column(
    column_data: ColumnCreate,
    current_user: User = Depends(get_current_user),
    columns: ColumnService = Depends(get_column_service)
):
    """Create a column at the end of the board"""

    try:
        column = columns.create_column(current_user.id, column_data.board_id, column_data.title)
    except BoardError as e:
        raise http_error(e)

    return ColumnResponse.model_validate(column)

@router.get("/", response_model=List[ColumnResponse])
def list_columns(
    board_id: str = Query(..., description="Board whose columns to list"),
    current_user: User = Depends(get_current_user),
    columns: ColumnService = Depends(get_column_service)
):
    try:
        return [ColumnResponse.model_validate(c) for c in columns.list_columns(current_user.id, board_id)]
    except BoardError as e:
        raise http_error(e)

@router.patch("/{column_id}", response_model=ColumnResponse)
def update_column(
    column_id: str,
    column_data: ColumnUpdate,
    current_user: User = Depends(get_current_user),
    columns: ColumnService = Depends(get_column_service)
):
    """Rename a column"""

    try:
        column = columns.update_column(current_user.id, column_id, column_data.title)
    except BoardError as e:
        raise http_error(e)

    return ColumnResponse.model_validate(column)

@router.patch("/{column_id}/order", response_model=ColumnResponse)
def move_column(
    column_id: str,
    move_data: ColumnMove,
    current_user: User = Depends(get_current_user),
    columns: ColumnService = Depends(get_column_service)
):
    """Drag and drop a column to a new position on its board"""

    try:
        column = columns.move_column(current_user.id, column_id, move_data.new_order)
    except BoardError as e:
        raise http_error(e)

    return ColumnResponse.model_validate(column)

@router.delete("/{column_id}", response_model=SuccessResponse)
def delete_column(
    column_id: str,
    current_user: User = Depends(get_current_user),
    columns: ColumnService = Depends(get_column_service)
):
    """Delete an empty column"""

    try:
        columns.delete_column(current_user.id, column_id)
    except BoardError as e:
        raise http_error(e)

    return SuccessResponse(message=f"Column {column_id} deleted successfully", id=column_id)
