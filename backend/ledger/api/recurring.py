"""API endpoints for recurring configs."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ledger.dependencies import get_ledger, get_store, raise_for_error
from ledger.errors import LedgerError
from ledger.schemas.entry import PopulatedEntry
from ledger.schemas.recurring import RecurringConfigResponse
from ledger.services.ledger_service import LedgerService
from ledger.store import LedgerStore

router = APIRouter(prefix="/recurring", tags=["recurring"])


@router.get("", response_model=List[RecurringConfigResponse])
def list_recurring_configs(store: LedgerStore = Depends(get_store)):
    """List live recurring configs."""
    try:
        configs = store.recurring_configs.list(order_by="created_at")
    except LedgerError as e:
        raise_for_error(e)
    return [RecurringConfigResponse.model_validate(c) for c in configs]


@router.get("/{config_id}/occurrences", response_model=List[PopulatedEntry])
def list_occurrences(
    config_id: str,
    ledger: LedgerService = Depends(get_ledger)
):
    """Effective occurrences of one series up to the horizon."""
    try:
        config = ledger.store.recurring_configs.get(config_id)
        if config is None or config.is_deleted:
            raise HTTPException(status_code=404, detail="Recurring config not found")
        return ledger.series_entries(config_id)
    except LedgerError as e:
        raise_for_error(e)
