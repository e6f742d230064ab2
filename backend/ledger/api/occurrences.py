"""
Occurrence mutation endpoints.

Each request addresses a feed line, which is resolved against the store
before the mutation runs so stale references fail with 404.
"""

from fastapi import APIRouter, Depends

from ledger.dependencies import check_result, get_ledger, raise_for_error
from ledger.errors import LedgerError
from ledger.schemas.entry import PopulatedEntry
from ledger.schemas.occurrence import (
    OccurrenceRef,
    ToggleFulfilledRequest,
    EditOccurrenceRequest,
    DeleteOccurrenceRequest,
    MutationResponse,
)
from ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/occurrences", tags=["occurrences"])


def _locate(ledger: LedgerService, ref: OccurrenceRef) -> PopulatedEntry:
    try:
        return ledger.locate(
            entry_id=ref.entry_id,
            recurring_config_id=ref.recurring_config_id,
            index=ref.index,
        )
    except LedgerError as e:
        raise_for_error(e)


@router.post("/toggle-fulfilled", response_model=MutationResponse)
def toggle_fulfilled(
    request: ToggleFulfilledRequest,
    ledger: LedgerService = Depends(get_ledger)
):
    """Flip paid/received state of one occurrence."""
    entry = _locate(ledger, request.occurrence)
    result = check_result(ledger.toggle_fulfilled(entry, skip_refresh=True))
    return MutationResponse(success=True, id=result.id)


@router.post("/edit", response_model=MutationResponse)
def edit_occurrence(
    request: EditOccurrenceRequest,
    ledger: LedgerService = Depends(get_ledger)
):
    """Edit one occurrence, or split its series with apply_to_subsequents."""
    entry = _locate(ledger, request.occurrence)
    result = check_result(ledger.edit_entry(
        entry,
        name=request.name,
        amount=request.amount,
        group_id=request.group_id,
        tag_id=request.tag_id,
        apply_to_subsequents=request.apply_to_subsequents,
        skip_refresh=True,
    ))
    return MutationResponse(success=True, id=result.id)


@router.post("/delete", response_model=MutationResponse)
def delete_occurrence(
    request: DeleteOccurrenceRequest,
    ledger: LedgerService = Depends(get_ledger)
):
    """Delete one occurrence, or end its series here with with_subsequents."""
    entry = _locate(ledger, request.occurrence)
    check_result(ledger.delete_entry(entry, with_subsequents=request.with_subsequents, skip_refresh=True))
    return MutationResponse(success=True)
