"""Schemas for kanban boards, columns, tasks and assignments"""
from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from collabboard.schemas.user import UserSummary


class KanbanBoardCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    tags: Optional[Any] = None


class KanbanBoardUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    tags: Optional[Any] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("name cannot be null")
        return v


class KanbanColumnCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=30)


class KanbanColumnUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=30)
    position: Optional[int] = None

    @field_validator("name", "position")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class KanbanTaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = Field(None, max_length=400)
    color: Optional[str] = Field(None, max_length=30)
    tags: Optional[Any] = None


class KanbanTaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = Field(None, max_length=400)
    color: Optional[str] = Field(None, max_length=30)
    tags: Optional[Any] = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v):
        if v is None:
            raise ValueError("title cannot be null")
        return v


class MoveTask(BaseModel):
    new_column_id: UUID
    new_position: int


class AssignTask(BaseModel):
    user_id: UUID


class TaskAssignmentResponse(BaseModel):
    id: str
    task_id: str
    user_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class AssigneeResponse(BaseModel):
    user: UserSummary

    class Config:
        from_attributes = True


class KanbanTaskResponse(BaseModel):
    id: str
    column_id: str
    title: str
    description: Optional[str]
    color: Optional[str]
    tags: Optional[Any]
    position: int
    created_by: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class KanbanTaskDetail(KanbanTaskResponse):
    assignments: List[AssigneeResponse] = []


class KanbanColumnResponse(BaseModel):
    id: str
    board_id: str
    name: str
    color: Optional[str]
    position: int
    created_at: datetime

    class Config:
        from_attributes = True


class KanbanColumnDetail(KanbanColumnResponse):
    tasks: List[KanbanTaskDetail] = []


class KanbanBoardResponse(BaseModel):
    id: str
    project_id: str
    name: str
    tags: Optional[Any]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class KanbanBoardDetail(KanbanBoardResponse):
    columns: List[KanbanColumnDetail] = []
