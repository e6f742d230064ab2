"""
Exclusion database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Date, Enum, Index
import enum
from ledger.database import Base


class ExclusionReason(str, enum.Enum):
    """Why an occurrence is overridden."""
    deletion = "deletion"
    modification = "modification"


class Exclusion(Base):
    """Override of one occurrence of a recurring series."""

    __tablename__ = "exclusions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=True, index=True)
    recurring_id = Column(String(36), nullable=False)
    date = Column(Date, nullable=False)  # Original occurrence date
    reason = Column(Enum(ExclusionReason), nullable=False)
    modified_entry_id = Column(String(36), nullable=True)  # Set only for modifications
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_exclusion_recurring_date", "recurring_id", "date"),
    )
