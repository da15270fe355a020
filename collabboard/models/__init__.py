"""collabboard Database Models"""
from collabboard.models.user import User
from collabboard.models.project import Project, ProjectStatus, ProjectVisibility
from collabboard.models.project_member import ProjectMember, ProjectRole, STRUCTURE_ROLES, CONTENT_ROLES
from collabboard.models.kanban_board import KanbanBoard
from collabboard.models.kanban_column import KanbanColumn
from collabboard.models.kanban_task import KanbanTask
from collabboard.models.task_assignment import TaskAssignment
from collabboard.utils.primary_keys import register_uuid_pk_listener

__all__ = [
    "User",
    "Project",
    "ProjectStatus",
    "ProjectVisibility",
    "ProjectMember",
    "ProjectRole",
    "STRUCTURE_ROLES",
    "CONTENT_ROLES",
    "KanbanBoard",
    "KanbanColumn",
    "KanbanTask",
    "TaskAssignment",
]


for _model in (
    User,
    Project,
    ProjectMember,
    KanbanBoard,
    KanbanColumn,
    KanbanTask,
    TaskAssignment,
):
    register_uuid_pk_listener(_model)
