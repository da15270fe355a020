"""Schemas for projects"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from collabboard.models.project import ProjectStatus, ProjectVisibility
from collabboard.schemas.project_member import ProjectMemberResponse


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    visibility: ProjectVisibility = ProjectVisibility.PRIVATE
    status: ProjectStatus = ProjectStatus.PLANNING


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    visibility: Optional[ProjectVisibility] = None
    status: Optional[ProjectStatus] = None

    @field_validator("title", "visibility", "status")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ProjectResponse(BaseModel):
    id: str
    title: str
    description: Optional[str]
    visibility: ProjectVisibility
    status: ProjectStatus
    owner_id: str
    created_at: datetime
    updated_at: datetime
    members: List[ProjectMemberResponse] = []

    class Config:
        from_attributes = True
