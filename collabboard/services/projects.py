"""Projects and their memberships."""
import logging
from typing import List

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from collabboard.exceptions import Conflict, Forbidden, NotFound
from collabboard.models import (
    CONTENT_ROLES,
    STRUCTURE_ROLES,
    KanbanBoard,
    KanbanColumn,
    Project,
    ProjectMember,
    ProjectRole,
    ProjectVisibility,
    User,
)
from collabboard.schemas import ProjectCreate, ProjectUpdate
from collabboard.services.kanban import delete_tasks_in_columns
from collabboard.services.permissions import check_project_permission, has_project_permission

logger = logging.getLogger(__name__)


def _project_query(db: Session):
    return db.query(Project).options(
        selectinload(Project.members).selectinload(ProjectMember.user),
    )


def _load_membership(project_id: str, user_id: str, db: Session) -> ProjectMember:
    membership = (
        db.query(ProjectMember)
        .options(selectinload(ProjectMember.user))
        .filter(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        )
        .first()
    )
    if membership is None:
        raise NotFound("Project member not found")
    return membership


def create_project(project_data: ProjectCreate, owner_id: str, db: Session) -> Project:
    """Create a project and register its owner as lead in the same transaction."""
    project = Project(owner_id=owner_id, **project_data.model_dump())
    db.add(project)
    try:
        db.flush()
        db.add(ProjectMember(project_id=project.id, user_id=owner_id, role=ProjectRole.LEAD.value))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Project %s created by %s", project.id, owner_id)
    return _project_query(db).filter(Project.id == project.id).first()


def list_my_projects(user_id: str, db: Session) -> List[Project]:
    member_of = select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
    return (
        _project_query(db)
        .filter(or_(Project.owner_id == user_id, Project.id.in_(member_of)))
        .order_by(Project.updated_at.desc())
        .all()
    )


def get_project(project_id: str, user_id: str, db: Session) -> Project:
    project = _project_query(db).filter(Project.id == project_id).first()
    if not project:
        raise NotFound("Project not found")

    if project.visibility == ProjectVisibility.PUBLIC:
        return project

    if has_project_permission(project_id, user_id, db, CONTENT_ROLES):
        return project

    # TODO: let 'internal' projects through for users of the same institution once institutions exist
    raise Forbidden("You don't have permission to view this project")


def update_project(project_id: str, project_update: ProjectUpdate, user_id: str, db: Session) -> Project:
    project = check_project_permission(project_id, user_id, db, STRUCTURE_ROLES)

    for field, value in project_update.model_dump(exclude_unset=True).items():
        setattr(project, field, value)
    db.commit()

    logger.info("Project %s updated by %s", project_id, user_id)
    return _project_query(db).filter(Project.id == project_id).first()


def delete_project(project_id: str, user_id: str, db: Session) -> None:
    """Only the owner may delete; boards, columns, tasks and members go with it."""
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFound("Project not found")
    if project.owner_id != user_id:
        raise Forbidden("Only the project owner can delete the project")

    board_ids = select(KanbanBoard.id).where(KanbanBoard.project_id == project_id)
    try:
        delete_tasks_in_columns(select(KanbanColumn.id).where(KanbanColumn.board_id.in_(board_ids)), db)
        db.delete(project)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Project %s deleted by %s", project_id, user_id)


# --- Members ---

def list_members(project_id: str, actor_id: str, db: Session) -> List[ProjectMember]:
    check_project_permission(project_id, actor_id, db, CONTENT_ROLES)

    return (
        db.query(ProjectMember)
        .options(selectinload(ProjectMember.user))
        .filter(ProjectMember.project_id == project_id)
        .order_by(ProjectMember.created_at.asc())
        .all()
    )


def add_member(project_id: str, user_id: str, role: ProjectRole, actor_id: str, db: Session) -> ProjectMember:
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    if db.query(User.id).filter(User.id == user_id).first() is None:
        raise NotFound("User not found")

    membership = ProjectMember(project_id=project_id, user_id=user_id, role=ProjectRole(role).value)
    db.add(membership)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("User is already a member of this project") from None

    logger.info("User %s added to project %s as %s by %s", user_id, project_id, membership.role, actor_id)
    return _load_membership(project_id, user_id, db)


def update_member_role(project_id: str, user_id: str, role: ProjectRole, actor_id: str, db: Session) -> ProjectMember:
    check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    membership = _load_membership(project_id, user_id, db)
    membership.role = ProjectRole(role).value
    db.commit()

    logger.info("User %s is now %s in project %s (changed by %s)", user_id, membership.role, project_id, actor_id)
    return _load_membership(project_id, user_id, db)


def remove_member(project_id: str, user_id: str, actor_id: str, db: Session) -> None:
    """A user may always leave a project; removing someone else requires lead."""
    if actor_id != user_id:
        check_project_permission(project_id, actor_id, db, STRUCTURE_ROLES)

    membership = _load_membership(project_id, user_id, db)
    db.delete(membership)
    db.commit()

    logger.info("User %s removed from project %s by %s", user_id, project_id, actor_id)
