"""Task assignment model (users attached to a task)"""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from collabboard.database import Base


class TaskAssignment(Base):
    __tablename__ = "task_assignments"

    id = Column(String(36), primary_key=True, index=True)
    task_id = Column(String(36), ForeignKey("kanban_tasks.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    task = relationship("KanbanTask", back_populates="assignments")
    user = relationship("User", back_populates="task_assignments")

    __table_args__ = (
        UniqueConstraint("task_id", "user_id", name="unique_task_assignment"),
    )
