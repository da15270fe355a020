"""
Project Member Model
"""
import enum
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from collabboard.database import Base


class ProjectRole(str, enum.Enum):
    LEAD = "lider"
    MEMBER = "membro"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ProjectRole"]:
        """Map a stored role string to a role, ``None`` when it is not recognised."""
        try:
            return cls(value)
        except ValueError:
            return None


# Structural entities (project settings, members, boards, columns)
STRUCTURE_ROLES = frozenset({ProjectRole.LEAD})
# Content entities (tasks, assignments) and read access
CONTENT_ROLES = frozenset({ProjectRole.LEAD, ProjectRole.MEMBER})


class ProjectMember(Base):
    __tablename__ = "project_members"

    id = Column(String(36), primary_key=True, index=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role = Column(String(30), default=ProjectRole.MEMBER.value, nullable=False)  # lider, membro
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="members")
    user = relationship("User", back_populates="project_memberships")

    __table_args__ = (
        UniqueConstraint('project_id', 'user_id', name='unique_project_member'),
    )
