"""
Recurring configuration database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Date, Enum, Integer
import enum
from ledger.database import Base


class Frequency(str, enum.Enum):
    """Unit a recurring series steps by."""
    week = "week"
    month = "month"
    year = "year"


class RecurringConfig(Base):
    """Recurrence rule for a series of entries."""

    __tablename__ = "recurring_configs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=True, index=True)
    frequency = Column(Enum(Frequency), nullable=False)
    interval = Column(Integer, default=0, nullable=False)  # Occurrence count, 0 = unbounded
    every = Column(Integer, default=1, nullable=False)  # Step multiplier on frequency
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
