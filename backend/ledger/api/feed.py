"""
Feed API endpoint.
"""

from fastapi import APIRouter, Depends

from ledger.dependencies import get_ledger, raise_for_error
from ledger.errors import LedgerError
from ledger.schemas.feed import FeedResponse
from ledger.schemas.group import GroupResponse
from ledger.schemas.recurring import RecurringConfigResponse
from ledger.schemas.tag import TagResponse
from ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedResponse)
def get_feed(ledger: LedgerService = Depends(get_ledger)):
    """Full projected feed with the groups, tags and configs it references."""
    try:
        projection = ledger.refresh()
    except LedgerError as e:
        raise_for_error(e)

    return FeedResponse(
        horizon=projection.horizon,
        entries=projection.entries,
        groups=[GroupResponse.model_validate(g) for g in projection.groups],
        tags=[TagResponse.model_validate(t) for t in projection.tags],
        recurring_configs=[RecurringConfigResponse.model_validate(c) for c in projection.recurring_configs],
        total=len(projection.entries),
    )
