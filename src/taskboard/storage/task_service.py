"""Task service layer for business logic"""

import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import BoardColumn, Priority, Task
from .access import ensure_board_access, ensure_board_manager, get_board_or_raise, get_user_or_raise
from .column_service import get_column_or_raise
from .base_service import BaseService
from .errors import InvalidInputError, NotFoundError, COLUMN_NOT_FOUND, TASK_NOT_FOUND
from .ordering import OrderedListStore

logger = logging.getLogger(__name__)

MAX_TASK_TITLE = 50
MAX_TASK_DESCRIPTION = 300

UPDATABLE_FIELDS = ("title", "description", "priority", "assignee_id")


def task_ordering() -> OrderedListStore:
    """Tasks ordered under their column; columns of one board share an aggregate"""
    return OrderedListStore(
        Task,
        parent_field="column_id",
        parent_model=BoardColumn,
        aggregate_field="board_id",
        sibling_code=TASK_NOT_FOUND,
        parent_code=COLUMN_NOT_FOUND,
    )


def _validate_task_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise InvalidInputError("Task title cannot be empty")
    if len(title) > MAX_TASK_TITLE:
        raise InvalidInputError(f"Task title must not exceed {MAX_TASK_TITLE} characters")
    return title.strip()


def _validate_description(description: Optional[str]) -> Optional[str]:
    if description is not None and len(description) > MAX_TASK_DESCRIPTION:
        raise InvalidInputError(f"Task description must not exceed {MAX_TASK_DESCRIPTION} characters")
    return description


def _coerce_priority(priority) -> Priority:
    if isinstance(priority, Priority):
        return priority
    try:
        return Priority(priority)
    except ValueError:
        raise InvalidInputError(f"Invalid priority value: {priority}")


def get_task_or_raise(session: Session, task_id: str) -> Task:
    task = session.get(Task, task_id)
    if task is None:
        raise NotFoundError(f"Task {task_id} not found", code=TASK_NOT_FOUND)
    return task


def lock_task_or_raise(session: Session, task_id: str) -> Task:
    """Load the task with a row lock and its current column, not a cached one"""
    task = session.execute(
        select(Task)
        .where(Task.id == task_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()
    if task is None:
        raise NotFoundError(f"Task {task_id} not found", code=TASK_NOT_FOUND)
    return task


class TaskService(BaseService):
    """Service class for task operations"""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None,
                 ordering: Optional[OrderedListStore] = None, config: Optional[dict] = None):
        super().__init__(session_factory, config)
        self.ordering = ordering or task_ordering()

    def create_task(
        self,
        user_id: str,
        column_id: str,
        title: str,
        description: Optional[str] = None,
        priority=Priority.LOW,
        assignee_id: Optional[str] = None,
    ) -> Task:
        """Create a task as the last task of ``column_id``"""
        title = _validate_task_title(title)
        description = _validate_description(description)
        priority = _coerce_priority(priority or Priority.LOW)

        def work(session: Session) -> Task:
            user = get_user_or_raise(session, user_id)
            column = get_column_or_raise(session, column_id)
            board = get_board_or_raise(session, column.board_id)
            ensure_board_access(session, user, board)
            if assignee_id is not None:
                get_user_or_raise(session, assignee_id)

            task = Task(
                id=self._new_id(session, Task),
                board_id=board.id,
                title=title,
                description=description,
                priority=priority,
                assignee_id=assignee_id,
            )
            self.ordering.insert(session, column_id, task)
            session.refresh(task)
            return task

        return self._run(work)

    def get_task(self, user_id: str, task_id: str) -> Task:
        def work(session: Session) -> Task:
            user = get_user_or_raise(session, user_id)
            task = get_task_or_raise(session, task_id)
            ensure_board_access(session, user, get_board_or_raise(session, task.board_id))
            return task

        return self._run(work)

    def update_task(self, user_id: str, task_id: str, updates: Dict[str, Any]) -> Task:
        """Update task attributes; position is only changed through ``move_task``"""
        updates = {field: value for field, value in updates.items() if field in UPDATABLE_FIELDS}
        if not updates:
            raise InvalidInputError("At least one field is required to update")

        if "title" in updates:
            updates["title"] = _validate_task_title(updates["title"])
        if "description" in updates:
            _validate_description(updates["description"])
        if "priority" in updates:
            updates["priority"] = _coerce_priority(updates["priority"])

        def work(session: Session) -> Task:
            user = get_user_or_raise(session, user_id)
            task = get_task_or_raise(session, task_id)
            board = get_board_or_raise(session, task.board_id)
            ensure_board_access(session, user, board)
            if updates.get("assignee_id") is not None:
                get_user_or_raise(session, updates["assignee_id"])

            for field, value in updates.items():
                setattr(task, field, value)
            session.flush()
            session.refresh(task)
            return task

        return self._run(work)

    def move_task(self, user_id: str, task_id: str, target_column_id: str, new_order: int) -> Task:
        """Drag a task within its column or onto another column of the same board"""
        if not target_column_id or new_order is None:
            raise InvalidInputError("Target column and new order are required")

        def work(session: Session) -> Task:
            user = get_user_or_raise(session, user_id)
            task = lock_task_or_raise(session, task_id)
            board = get_board_or_raise(session, task.board_id)
            ensure_board_access(session, user, board)

            if task.column_id == target_column_id:
                moved = self.ordering.move_within_parent(session, task_id, target_column_id, new_order)
            else:
                moved = self.ordering.move_across_parents(
                    session, task_id, task.column_id, target_column_id, new_order
                )
            session.refresh(moved)
            return moved

        return self._run(work)

    def delete_task(self, user_id: str, task_id: str) -> None:
        def work(session: Session) -> None:
            user = get_user_or_raise(session, user_id)
            task = lock_task_or_raise(session, task_id)
            board = get_board_or_raise(session, task.board_id)
            ensure_board_manager(user, board, "delete tasks")

            self.ordering.remove(session, task_id, task.column_id)

        self._run(work)
