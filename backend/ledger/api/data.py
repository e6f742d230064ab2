"""
Bulk data endpoints.
"""

from fastapi import APIRouter, Depends

from ledger.dependencies import check_result, get_ledger
from ledger.schemas.occurrence import MutationResponse
from ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/data", tags=["data"])


@router.post("/erase", response_model=MutationResponse)
def erase_all_data(ledger: LedgerService = Depends(get_ledger)):
    """Permanently delete every group, tag, entry, config and exclusion of the caller."""
    check_result(ledger.erase_all_data())
    return MutationResponse(success=True)
