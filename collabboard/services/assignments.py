"""Users attached to kanban tasks.

Both the actor and the assignee must qualify as lead or member of the task's
project; the owner qualifies implicitly.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from collabboard.exceptions import Conflict, Forbidden, NotFound
from collabboard.models import CONTENT_ROLES, TaskAssignment
from collabboard.services.hierarchy import project_of_task
from collabboard.services.permissions import check_project_permission

logger = logging.getLogger(__name__)


def assign_task(task_id: str, user_id: str, actor_id: str, db: Session) -> TaskAssignment:
    project_id = project_of_task(task_id, db)
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    try:
        check_project_permission(project_id, user_id, db, CONTENT_ROLES)
    except Forbidden:
        raise Forbidden("Cannot assign a user who is not a member of the project") from None

    assignment = TaskAssignment(task_id=task_id, user_id=user_id)
    db.add(assignment)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("User is already assigned to this task") from None
    db.refresh(assignment)

    logger.info("User %s assigned to task %s by %s", user_id, task_id, actor_id)
    return assignment


def unassign_task(task_id: str, user_id: str, actor_id: str, db: Session) -> None:
    project_id = project_of_task(task_id, db)
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    assignment = (
        db.query(TaskAssignment)
        .filter(
            TaskAssignment.task_id == task_id,
            TaskAssignment.user_id == user_id,
        )
        .first()
    )
    if not assignment:
        raise NotFound("Assignment not found")

    db.delete(assignment)
    db.commit()

    logger.info("User %s unassigned from task %s by %s", user_id, task_id, actor_id)
