"""Schemas for users"""
from typing import Optional

from pydantic import BaseModel


class UserSummary(BaseModel):
    id: str
    name: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True
