"""Pydantic schemas for API requests and responses"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

# Enums for API
class UserRoleEnum(str, Enum):
    ADMIN = "admin"
    USER = "user"

class PriorityEnum(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

# User schemas
class UserCreate(BaseModel):
    """Schema for registering a user; self-registered users always get the user role"""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=320)

class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: UserRoleEnum
    created_at: datetime

    class Config:
        from_attributes = True

# Board schemas
class BoardCreate(BaseModel):
    title: str = Field(..., max_length=100, description="Board title")

class BoardUpdate(BaseModel):
    title: str = Field(..., max_length=100, description="Board title")

class BoardResponse(BaseModel):
    """Schema for board responses"""
    id: str
    title: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class MembersAdd(BaseModel):
    """Schema for adding members to a board"""
    members: List[str] = Field(..., min_length=1, description="User IDs to add")

class MembersResponse(BaseModel):
    board_id: str
    members: List[str]

# Column schemas
class ColumnCreate(BaseModel):
    """Schema for creating a column; it is always appended as the last column"""
    board_id: str = Field(..., description="Board the column belongs to")
    title: str = Field(..., max_length=25, description="Column title")

class ColumnUpdate(BaseModel):
    title: str = Field(..., max_length=25, description="Column title")

class ColumnMove(BaseModel):
    """Schema for drag-and-drop of a column"""
    new_order: int = Field(..., ge=0, description="Zero-based target position")

class ColumnResponse(BaseModel):
    """Schema for column responses"""
    id: str
    board_id: str
    title: str
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# Task schemas
class TaskCreate(BaseModel):
    """Schema for creating a task; it is always appended as the last task"""
    column_id: str = Field(..., description="Column the task belongs to")
    title: str = Field(..., max_length=50, description="Task title")
    description: Optional[str] = Field(None, max_length=300)
    priority: PriorityEnum = Field(PriorityEnum.LOW, description="Task priority")
    assignee_id: Optional[str] = Field(None, description="Assigned user ID")

class TaskUpdate(BaseModel):
    """Schema for updating a task"""
    title: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=300)
    priority: Optional[PriorityEnum] = None
    assignee_id: Optional[str] = None

class TaskMove(BaseModel):
    """Schema for drag-and-drop of a task"""
    target_column_id: str = Field(..., description="Destination column (may be the current one)")
    new_order: int = Field(..., ge=0, description="Zero-based target position")

class TaskResponse(BaseModel):
    """Schema for task responses"""
    id: str
    column_id: str
    board_id: str
    title: str
    description: Optional[str] = None
    priority: PriorityEnum
    assignee_id: Optional[str] = None
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# Populated board
class ColumnWithTasks(ColumnResponse):
    tasks: List[TaskResponse] = []

class BoardDetailResponse(BoardResponse):
    """Board with its columns and tasks, each list in order"""
    members: List[str] = []
    columns: List[ColumnWithTasks] = []

# Common response schemas
class SuccessResponse(BaseModel):
    """Schema for success responses"""
    message: str
    id: Optional[str] = None
