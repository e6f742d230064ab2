"""
Entry API endpoints.
"""

from fastapi import APIRouter, Depends

from ledger.dependencies import check_result, get_ledger
from ledger.schemas.entry import EntryCreate
from ledger.schemas.occurrence import MutationResponse
from ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/entries", tags=["entries"])


@router.post("", response_model=MutationResponse, status_code=201)
def create_entry(
    entry: EntryCreate,
    ledger: LedgerService = Depends(get_ledger)
):
    """
    Create a standalone entry, or a recurring series when a recurrence is
    given. For a series the returned id is the recurring config id.
    """
    if entry.recurrence is not None:
        result = ledger.create_recurring_entry(
            name=entry.name,
            entry_type=entry.type,
            amount=entry.amount,
            start_date=entry.date,
            frequency=entry.recurrence.frequency,
            interval=entry.recurrence.interval,
            every=entry.recurrence.every,
            end_date=entry.recurrence.end_date,
            currency_code=entry.currency_code,
            group_id=entry.group_id,
            tag_id=entry.tag_id,
            skip_refresh=True,
        )
    else:
        result = ledger.create_entry(
            name=entry.name,
            entry_type=entry.type,
            amount=entry.amount,
            entry_date=entry.date,
            currency_code=entry.currency_code,
            group_id=entry.group_id,
            tag_id=entry.tag_id,
            fullfilled=entry.fullfilled,
            skip_refresh=True,
        )

    check_result(result)
    return MutationResponse(success=True, id=result.id)
