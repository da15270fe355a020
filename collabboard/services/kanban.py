"""Kanban boards, columns and tasks.

Every mutation follows the same path: locate the project that owns the
target through :mod:`collabboard.services.hierarchy`, check the actor's role
with :func:`check_project_permission`, then write. The role check and the
write are not wrapped in one transaction, so a membership revoked in between
is only noticed on the next request.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from collabboard.exceptions import NotFound
from collabboard.models import (
    CONTENT_ROLES,
    STRUCTURE_ROLES,
    KanbanBoard,
    KanbanColumn,
    KanbanTask,
    TaskAssignment,
)
from collabboard.schemas import (
    KanbanBoardCreate,
    KanbanBoardUpdate,
    KanbanColumnCreate,
    KanbanColumnUpdate,
    KanbanTaskCreate,
    KanbanTaskUpdate,
)
from collabboard.services import positions
from collabboard.services.hierarchy import project_of_board, project_of_column, project_of_task
from collabboard.services.permissions import check_project_permission

logger = logging.getLogger(__name__)


def _load_board(board_id: str, db: Session) -> KanbanBoard:
    board = db.query(KanbanBoard).filter(KanbanBoard.id == board_id).first()
    if not board:
        raise NotFound("Kanban board not found")
    return board


def _load_column(column_id: str, db: Session) -> KanbanColumn:
    column = db.query(KanbanColumn).filter(KanbanColumn.id == column_id).first()
    if not column:
        raise NotFound("Column not found")
    return column


def _load_task(task_id: str, db: Session) -> KanbanTask:
    task = db.query(KanbanTask).filter(KanbanTask.id == task_id).first()
    if not task:
        raise NotFound("Task not found")
    return task


def _apply(entity, update_data: dict) -> None:
    for field, value in update_data.items():
        setattr(entity, field, value)


def delete_tasks_in_columns(column_ids, db: Session) -> int:
    """Bulk-delete the tasks of the given columns; assignments cascade in storage.

    ``column_ids`` may be a list or a SELECT of column ids. Nothing is committed.
    """
    return (
        db.query(KanbanTask)
        .filter(KanbanTask.column_id.in_(column_ids))
        .delete(synchronize_session="fetch")
    )


# --- Boards ---

def create_board(project_id: str, board_data: KanbanBoardCreate, actor_id: str, db: Session) -> KanbanBoard:
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    board = KanbanBoard(project_id=project_id, **board_data.model_dump())
    db.add(board)
    db.commit()
    db.refresh(board)

    logger.info("Board %s created in project %s by %s", board.id, project_id, actor_id)
    return board


def list_boards(project_id: str, actor_id: str, db: Session) -> List[KanbanBoard]:
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    return (
        db.query(KanbanBoard)
        .filter(KanbanBoard.project_id == project_id)
        .order_by(KanbanBoard.created_at.asc(), KanbanBoard.id.asc())
        .all()
    )


def get_board(board_id: str, actor_id: str, db: Session) -> KanbanBoard:
    """Return the board with its columns, tasks and assignees, all ordered by position."""
    project_id = project_of_board(board_id, db)
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    board = (
        db.query(KanbanBoard)
        .options(
            selectinload(KanbanBoard.columns)
            .selectinload(KanbanColumn.tasks)
            .selectinload(KanbanTask.assignments)
            .selectinload(TaskAssignment.user)
        )
        .filter(KanbanBoard.id == board_id)
        .first()
    )
    if not board:
        raise NotFound("Kanban board not found")
    return board


def update_board(board_id: str, board_update: KanbanBoardUpdate, actor_id: str, db: Session) -> KanbanBoard:
    project_id = project_of_board(board_id, db)
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    board = _load_board(board_id, db)
    _apply(board, board_update.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(board)

    logger.info("Board %s updated by %s", board_id, actor_id)
    return board


def delete_board(board_id: str, actor_id: str, db: Session) -> None:
    project_id = project_of_board(board_id, db)
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    board = _load_board(board_id, db)
    try:
        # Columns and assignments cascade in storage, the task edge does not
        removed = delete_tasks_in_columns(
            select(KanbanColumn.id).where(KanbanColumn.board_id == board_id), db
        )
        db.delete(board)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Board %s deleted by %s (%d tasks removed)", board_id, actor_id, removed)


# --- Columns ---

def create_column(board_id: str, column_data: KanbanColumnCreate, actor_id: str, db: Session) -> KanbanColumn:
    project_id = project_of_board(board_id, db)
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    column = KanbanColumn(
        board_id=board_id,
        position=positions.next_position(KanbanColumn, board_id, db),
        **column_data.model_dump(),
    )
    db.add(column)
    db.commit()
    db.refresh(column)

    logger.info("Column %s created on board %s at position %d by %s", column.id, board_id, column.position, actor_id)
    return column


def update_column(
    column_id: str,
    column_update: KanbanColumnUpdate,
    actor_id: str,
    db: Session,
    policy: Optional[positions.PositionPolicy] = None,
) -> KanbanColumn:
    project_id = project_of_column(column_id, db)
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    column = _load_column(column_id, db)
    update_data = column_update.model_dump(exclude_unset=True)
    new_position = update_data.pop("position", None)

    _apply(column, update_data)
    if new_position is not None:
        positions.move(column, column.board_id, new_position, db, policy)
    db.commit()
    db.refresh(column)

    logger.info("Column %s updated by %s", column_id, actor_id)
    return column


def delete_column(
    column_id: str,
    actor_id: str,
    db: Session,
    policy: Optional[positions.PositionPolicy] = None,
) -> None:
    """Remove a column and its tasks in one transaction.

    The column -> task foreign key does not cascade, so the tasks are deleted
    first. A failure at either step rolls both back.
    """
    project_id = project_of_column(column_id, db)
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    column = _load_column(column_id, db)
    board_id = column.board_id
    try:
        removed = delete_tasks_in_columns([column_id], db)
        db.delete(column)
        db.flush()
        positions.compact(KanbanColumn, board_id, db, policy)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Column %s deleted by %s (%d tasks removed)", column_id, actor_id, removed)


# --- Tasks ---

def create_task(column_id: str, task_data: KanbanTaskCreate, actor_id: str, db: Session) -> KanbanTask:
    project_id = project_of_column(column_id, db)
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    task = KanbanTask(
        column_id=column_id,
        created_by=actor_id,
        position=positions.next_position(KanbanTask, column_id, db),
        **task_data.model_dump(),
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info("Task %s created in column %s at position %d by %s", task.id, column_id, task.position, actor_id)
    return task


def update_task(task_id: str, task_update: KanbanTaskUpdate, actor_id: str, db: Session) -> KanbanTask:
    project_id = project_of_task(task_id, db)
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    task = _load_task(task_id, db)
    _apply(task, task_update.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(task)

    logger.info("Task %s updated by %s", task_id, actor_id)
    return task


def move_task(
    task_id: str,
    new_column_id: str,
    new_position: int,
    actor_id: str,
    db: Session,
    policy: Optional[positions.PositionPolicy] = None,
) -> KanbanTask:
    project_id = project_of_task(task_id, db)
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    if project_of_column(new_column_id, db) != project_id:
        raise NotFound("Target column not found in this project")

    task = _load_task(task_id, db)
    positions.move(task, new_column_id, new_position, db, policy)
    db.commit()
    db.refresh(task)

    logger.info("Task %s moved to column %s position %d by %s", task_id, new_column_id, task.position, actor_id)
    return task


def delete_task(
    task_id: str,
    actor_id: str,
    db: Session,
    policy: Optional[positions.PositionPolicy] = None,
) -> None:
    project_id = project_of_task(task_id, db)
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    task = _load_task(task_id, db)
    column_id = task.column_id
    db.delete(task)
    db.flush()
    positions.compact(KanbanTask, column_id, db, policy)
    db.commit()

    logger.info("Task %s deleted by %s", task_id, actor_id)
