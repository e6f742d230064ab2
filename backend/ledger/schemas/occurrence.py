"""
Request and response schemas for occurrence mutations.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from decimal import Decimal


class OccurrenceRef(BaseModel):
    """
    Addresses one feed line: a standalone entry by entry_id, or a series
    occurrence by recurring_config_id and index.
    """
    entry_id: Optional[str] = None
    recurring_config_id: Optional[str] = None
    index: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def check_target(self):
        if self.recurring_config_id is None and self.entry_id is None:
            raise ValueError("entry_id or recurring_config_id is required")
        if self.recurring_config_id is not None and self.index is None:
            raise ValueError("index is required for recurring occurrences")
        return self


class ToggleFulfilledRequest(BaseModel):
    occurrence: OccurrenceRef


class EditOccurrenceRequest(BaseModel):
    occurrence: OccurrenceRef
    name: str = Field(..., min_length=1, max_length=200)
    amount: Decimal
    group_id: Optional[str] = None
    tag_id: Optional[str] = None
    apply_to_subsequents: bool = False


class DeleteOccurrenceRequest(BaseModel):
    occurrence: OccurrenceRef
    with_subsequents: bool = False


class MutationResponse(BaseModel):
    success: bool
    id: Optional[str] = None
