"""
Pydantic schemas for request/response validation
"""
from collabboard.schemas.user import UserSummary
from collabboard.schemas.project_member import ProjectMemberCreate, ProjectMemberUpdate, ProjectMemberResponse
from collabboard.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from collabboard.schemas.kanban import (
    AssignTask,
    KanbanBoardCreate,
    KanbanBoardDetail,
    KanbanBoardResponse,
    KanbanBoardUpdate,
    KanbanColumnCreate,
    KanbanColumnResponse,
    KanbanColumnUpdate,
    KanbanTaskCreate,
    KanbanTaskResponse,
    KanbanTaskUpdate,
    MoveTask,
    TaskAssignmentResponse,
)

__all__ = [
    "UserSummary",
    "ProjectMemberCreate",
    "ProjectMemberUpdate",
    "ProjectMemberResponse",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "AssignTask",
    "KanbanBoardCreate",
    "KanbanBoardDetail",
    "KanbanBoardResponse",
    "KanbanBoardUpdate",
    "KanbanColumnCreate",
    "KanbanColumnResponse",
    "KanbanColumnUpdate",
    "KanbanTaskCreate",
    "KanbanTaskResponse",
    "KanbanTaskUpdate",
    "MoveTask",
    "TaskAssignmentResponse",
]
