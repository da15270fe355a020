"""Resolve the project that owns a board, column or task.

Each lookup is a single joined query over the ownership chain
(task -> column -> board -> project). An entity whose chain is broken at any
hop is reported as not found rather than as unauthorized.
"""
from sqlalchemy.orm import Session

from collabboard.exceptions import NotFound
from collabboard.models import KanbanBoard, KanbanColumn, KanbanTask, Project


def project_of_board(board_id: str, db: Session) -> str:
    project_id = (
        db.query(Project.id)
        .join(KanbanBoard, KanbanBoard.project_id == Project.id)
        .filter(KanbanBoard.id == board_id)
        .scalar()
    )
    if project_id is None:
        raise NotFound("Kanban board not found or not associated with a project")
    return project_id


def project_of_column(column_id: str, db: Session) -> str:
    project_id = (
        db.query(Project.id)
        .join(KanbanBoard, KanbanBoard.project_id == Project.id)
        .join(KanbanColumn, KanbanColumn.board_id == KanbanBoard.id)
        .filter(KanbanColumn.id == column_id)
        .scalar()
    )
    if project_id is None:
        raise NotFound("Column not found or not associated with a project")
    return project_id


def project_of_task(task_id: str, db: Session) -> str:
    project_id = (
        db.query(Project.id)
        .join(KanbanBoard, KanbanBoard.project_id == Project.id)
        .join(KanbanColumn, KanbanColumn.board_id == KanbanBoard.id)
        .join(KanbanTask, KanbanTask.column_id == KanbanColumn.id)
        .filter(KanbanTask.id == task_id)
        .scalar()
    )
    if project_id is None:
        raise NotFound("Task not found or not associated with a project")
    return project_id
