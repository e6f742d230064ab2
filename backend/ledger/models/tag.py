"""
Entry tag database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime
from ledger.database import Base


class EntryTag(Base):
    """Colored label for entries, optionally created from a built-in suggestion."""

    __tablename__ = "entry_tags"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(20), nullable=True)  # Palette name, e.g. "green"
    suggest_id = Column(String(50), nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
