"""Schemas for project members"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from collabboard.models.project_member import ProjectRole
from collabboard.schemas.user import UserSummary


class ProjectMemberCreate(BaseModel):
    user_id: UUID
    role: ProjectRole = ProjectRole.MEMBER


class ProjectMemberUpdate(BaseModel):
    role: ProjectRole


class ProjectMemberResponse(BaseModel):
    id: str
    project_id: str
    role: str
    created_at: datetime
    user: UserSummary

    class Config:
        from_attributes = True
