"""Pydantic schemas for recurring configs."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

from ledger.models.recurring_config import Frequency


class RecurrenceCreate(BaseModel):
    """Recurrence attached to a new entry."""
    frequency: Frequency
    interval: int = Field(0, ge=0)  # 0 = unbounded
    every: int = Field(1, ge=1)
    end_date: Optional[date] = None


class RecurringConfigResponse(BaseModel):
    id: str
    frequency: Frequency
    interval: int
    every: int
    start_date: date
    end_date: Optional[date] = None
    created_at: datetime

    class Config:
        from_attributes = True
