"""Kanban board, column, task and assignment endpoints"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from collabboard.database import get_db
from collabboard.dependencies import get_current_user
from collabboard.models import User
from collabboard.schemas import (
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
from collabboard.services import assignments, kanban

router = APIRouter(tags=["kanban"])


# --- Boards ---

@router.post(
    "/projects/{project_id}/kanban",
    response_model=KanbanBoardResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_board(
    project_id: UUID,
    board_data: KanbanBoardCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.create_board(str(project_id), board_data, current_user.id, db)


@router.get("/projects/{project_id}/kanban", response_model=List[KanbanBoardResponse])
async def list_boards(
    project_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.list_boards(str(project_id), current_user.id, db)


@router.get("/kanban/{board_id}", response_model=KanbanBoardDetail)
async def get_board(
    board_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Return the board with its ordered columns, tasks and assignees."""
    return kanban.get_board(str(board_id), current_user.id, db)


@router.patch("/kanban/{board_id}", response_model=KanbanBoardResponse)
async def update_board(
    board_id: UUID,
    board_update: KanbanBoardUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.update_board(str(board_id), board_update, current_user.id, db)


@router.delete("/kanban/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_board(
    board_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    kanban.delete_board(str(board_id), current_user.id, db)


# --- Columns ---

@router.post(
    "/kanban/{board_id}/columns",
    response_model=KanbanColumnResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_column(
    board_id: UUID,
    column_data: KanbanColumnCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.create_column(str(board_id), column_data, current_user.id, db)


@router.patch("/columns/{column_id}", response_model=KanbanColumnResponse)
async def update_column(
    column_id: UUID,
    column_update: KanbanColumnUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.update_column(str(column_id), column_update, current_user.id, db)


@router.delete("/columns/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_column(
    column_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    kanban.delete_column(str(column_id), current_user.id, db)


# --- Tasks ---

@router.post(
    "/columns/{column_id}/tasks",
    response_model=KanbanTaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    column_id: UUID,
    task_data: KanbanTaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.create_task(str(column_id), task_data, current_user.id, db)


@router.patch("/tasks/{task_id}", response_model=KanbanTaskResponse)
async def update_task(
    task_id: UUID,
    task_update: KanbanTaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.update_task(str(task_id), task_update, current_user.id, db)


@router.patch("/tasks/{task_id}/move", response_model=KanbanTaskResponse)
async def move_task(
    task_id: UUID,
    move_data: MoveTask,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return kanban.move_task(
        str(task_id), str(move_data.new_column_id), move_data.new_position, current_user.id, db
    )


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    kanban.delete_task(str(task_id), current_user.id, db)


# --- Assignees ---

@router.post(
    "/tasks/{task_id}/assign",
    response_model=TaskAssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_task(
    task_id: UUID,
    assign_data: AssignTask,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Attach a project member to a task."""
    return assignments.assign_task(str(task_id), str(assign_data.user_id), current_user.id, db)


@router.delete("/tasks/{task_id}/assign/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unassign_task(
    task_id: UUID,
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    assignments.unassign_task(str(task_id), str(user_id), current_user.id, db)
