"""Project-scoped role checks.

Every structural or content rule of the kanban layer is expressed as a set of
allowed roles handed to :func:`check_project_permission`. The project owner
always passes, whether or not they hold a membership row.
"""
import logging
from typing import AbstractSet, Optional

from sqlalchemy.orm import Session

from collabboard.exceptions import Forbidden, NotFound
from collabboard.models import Project, ProjectMember, ProjectRole, STRUCTURE_ROLES

logger = logging.getLogger(__name__)


def get_membership_role(project_id: str, user_id: str, db: Session) -> Optional[ProjectRole]:
    """Return the user's role in the project, ``None`` without a recognised membership."""
    role = (
        db.query(ProjectMember.role)
        .filter(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        )
        .scalar()
    )
    return ProjectRole.parse(role)


def check_project_permission(
    project_id: str,
    user_id: str,
    db: Session,
    allowed_roles: AbstractSet[ProjectRole] = STRUCTURE_ROLES,
) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if project is None:
        raise NotFound("Project not found")

    if project.owner_id == user_id:
        return project

    role = get_membership_role(project_id, user_id, db)
    if role is not None and role in allowed_roles:
        return project

    logger.warning(
        "Permission denied for user %s on project %s (role=%s, allowed=%s)",
        user_id,
        project_id,
        role.value if role else None,
        sorted(r.value for r in allowed_roles),
    )
    raise Forbidden("You don't have permission to perform this action")


def has_project_permission(
    project_id: str,
    user_id: str,
    db: Session,
    allowed_roles: AbstractSet[ProjectRole] = STRUCTURE_ROLES,
) -> bool:
    """Boolean form of :func:`check_project_permission`; a missing project still raises."""
    try:
        check_project_permission(project_id, user_id, db, allowed_roles)
    except Forbidden:
        return False
    return True
