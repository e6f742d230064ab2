"""
Tag Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class TagCreate(BaseModel):
    """Schema for creating a tag."""
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(None, max_length=20)
    suggest_id: Optional[str] = Field(None, max_length=50)


class TagUpdate(BaseModel):
    """Schema for updating a tag. Only the color is editable."""
    color: Optional[str] = Field(None, max_length=20)


class TagResponse(BaseModel):
    """Schema for tag response."""
    id: str
    name: str
    color: Optional[str] = None
    suggest_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TagSuggestion(BaseModel):
    """Built-in tag the user has not created yet."""
    suggest_id: str
    name: str
    color: str
