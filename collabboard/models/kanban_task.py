"""
Kanban Task Model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from collabboard.database import Base
from collabboard.utils.timestamps import utcnow


class KanbanTask(Base):
    __tablename__ = "kanban_tasks"

    id = Column(String(36), primary_key=True, index=True)
    title = Column(String(120), nullable=False)
    description = Column(String(400), nullable=True)
    color = Column(String(30), nullable=True)
    tags = Column(JSON, nullable=True)
    column_id = Column(String(36), ForeignKey("kanban_columns.id"), nullable=False, index=True)
    position = Column(Integer, default=0, nullable=False)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    column = relationship("KanbanColumn", back_populates="tasks")
    creator = relationship("User", foreign_keys=[created_by])
    assignments = relationship(
        "TaskAssignment", back_populates="task", cascade="all, delete-orphan", passive_deletes=True
    )
