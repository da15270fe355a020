"""
Kanban Column Model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from collabboard.database import Base
from collabboard.utils.timestamps import utcnow


class KanbanColumn(Base):
    __tablename__ = "kanban_columns"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    color = Column(String(30), nullable=True)
    board_id = Column(String(36), ForeignKey("kanban_boards.id", ondelete="CASCADE"), nullable=False, index=True)
    # Ordering is by allocation convention only, duplicates are not rejected
    position = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    # Relationships
    board = relationship("KanbanBoard", back_populates="columns")
    # Tasks do not cascade with their column; the column must be emptied first
    tasks = relationship(
        "KanbanTask",
        back_populates="column",
        passive_deletes="all",
        order_by="(KanbanTask.position, KanbanTask.created_at)",
    )
