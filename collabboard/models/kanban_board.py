"""
Kanban Board Model
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from collabboard.database import Base
from collabboard.utils.timestamps import utcnow


class KanbanBoard(Base):
    __tablename__ = "kanban_boards"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    tags = Column(JSON, nullable=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="boards")
    columns = relationship(
        "KanbanColumn",
        back_populates="board",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(KanbanColumn.position, KanbanColumn.created_at)",
    )
