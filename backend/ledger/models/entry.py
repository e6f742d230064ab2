"""
Ledger entry database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Date, Enum, Index
import enum
from ledger.database import Base


class EntryType(str, enum.Enum):
    """Entry type enumeration."""
    income = "income"
    expense = "expense"


class Entry(Base):
    """
    A ledger line.

    Standalone entries have no recurring_id. An entry with a recurring_id is
    either the anchor of that series or a replacement for one of its
    occurrences; replacements are only reached through an exclusion.
    """

    __tablename__ = "entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    type = Column(Enum(EntryType), nullable=False)
    amount = Column(String(40), nullable=False)  # Decimal string, e.g. "123.45000000"
    currency_code = Column(String(3), nullable=False)
    date = Column(Date, nullable=False, index=True)
    fullfilled = Column(Boolean, default=False, nullable=False)
    # No foreign keys: references may dangle and are resolved defensively
    recurring_id = Column(String(36), nullable=True, index=True)
    group_id = Column(String(36), nullable=True)
    tag_id = Column(String(36), nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_entry_recurring_date", "recurring_id", "date"),
    )
