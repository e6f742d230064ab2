"""
Group API endpoints.
"""

from fastapi import APIRouter, Depends
from typing import List

from ledger.dependencies import check_result, get_ledger, get_store, raise_for_error
from ledger.errors import LedgerError
from ledger.schemas.group import GroupCreate, GroupResponse
from ledger.schemas.occurrence import MutationResponse
from ledger.services.ledger_service import LedgerService
from ledger.store import LedgerStore

router = APIRouter()


@router.get("", response_model=List[GroupResponse])
def list_groups(store: LedgerStore = Depends(get_store)):
    """List live groups in creation order."""
    try:
        groups = store.groups.list(order_by="created_at")
    except LedgerError as e:
        raise_for_error(e)
    return [GroupResponse.model_validate(g) for g in groups]


@router.post("", response_model=GroupResponse, status_code=201)
def create_group(
    group: GroupCreate,
    ledger: LedgerService = Depends(get_ledger)
):
    """Create a new group."""
    result = check_result(ledger.create_group(group.name, group.icon, skip_refresh=True))
    return ledger.store.groups.get(result.id)


@router.delete("/{group_id}", response_model=MutationResponse)
def delete_group(
    group_id: str,
    ledger: LedgerService = Depends(get_ledger)
):
    """Soft-delete a group. Entries keep the dangling reference."""
    check_result(ledger.delete_group(group_id, skip_refresh=True))
    return MutationResponse(success=True, id=group_id)
