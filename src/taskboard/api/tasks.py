"""Tasks API endpoints"""

from fastapi import APIRouter, Depends

from ..models import User
from ..storage.errors import BoardError
from ..storage.task_service import TaskService
from .auth import get_current_user
from .errors import http_error
from .providers import get_task_service
from .schemas import (
    TaskCreate,
    TaskUpdate,
    TaskMove,
    TaskResponse,
    SuccessResponse
)

router = APIRouter()

@router.post("/", response_model=TaskResponse, status_code=201)
def create_task(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service)
):
    """Create a task at the bottom of a column"""

    try:
        task = tasks.create_task(
            user_id=current_user.id,
            column_id=task_data.column_id,
            title=task_data.title,
            description=task_data.description,
            priority=task_data.priority.value,
            assignee_id=task_data.assignee_id
        )
    except BoardError as e:
        raise http_error(e)

    return TaskResponse.model_validate(task)

@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service)
):
    try:
        return TaskResponse.model_validate(tasks.get_task(current_user.id, task_id))
    except BoardError as e:
        raise http_error(e)

@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service)
):
    """Update task attributes (only the fields sent are changed)"""

    updates = {}
    for field, value in task_data.model_dump(exclude_unset=True).items():
        # Convert enum values
        if field == "priority" and value is not None:
            updates[field] = value.value
        else:
            updates[field] = value

    try:
        task = tasks.update_task(current_user.id, task_id, updates)
    except BoardError as e:
        raise http_error(e)

    return TaskResponse.model_validate(task)

@router.patch("/{task_id}/move", response_model=TaskResponse)
def move_task(
    task_id: str,
    move_data: TaskMove,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service)
):
    """Drag and drop a task within its column or onto another column of the board"""

    try:
        task = tasks.move_task(current_user.id, task_id, move_data.target_column_id, move_data.new_order)
    except BoardError as e:
        raise http_error(e)

    return TaskResponse.model_validate(task)

@router.delete("/{task_id}", response_model=SuccessResponse)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service)
):
    try:
        tasks.delete_task(current_user.id, task_id)
    except BoardError as e:
        raise http_error(e)

    return SuccessResponse(message=f"Task {task_id} deleted successfully", id=task_id)
