"""
Group Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class GroupCreate(BaseModel):
    """Schema for creating a group."""
    name: str = Field(..., min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=50)


class GroupResponse(BaseModel):
    """Schema for group response."""
    id: str
    name: str
    icon: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
