"""
Tag API endpoints.
"""

from fastapi import APIRouter, Depends
from typing import List

from ledger.dependencies import check_result, get_ledger, get_store, raise_for_error
from ledger.errors import LedgerError
from ledger.schemas.occurrence import MutationResponse
from ledger.schemas.tag import TagCreate, TagUpdate, TagResponse, TagSuggestion
from ledger.services.ledger_service import LedgerService
from ledger.services.tag_service import available_suggestions
from ledger.store import LedgerStore

router = APIRouter()


@router.get("", response_model=List[TagResponse])
def list_tags(store: LedgerStore = Depends(get_store)):
    """List live tags in creation order."""
    try:
        tags = store.tags.list(order_by="created_at")
    except LedgerError as e:
        raise_for_error(e)
    return [TagResponse.model_validate(t) for t in tags]


@router.get("/suggestions", response_model=List[TagSuggestion])
def list_tag_suggestions(store: LedgerStore = Depends(get_store)):
    """Built-in tags that have not been created yet."""
    try:
        tags = store.tags.list()
    except LedgerError as e:
        raise_for_error(e)
    return available_suggestions(tags)


@router.post("", response_model=TagResponse, status_code=201)
def create_tag(
    tag: TagCreate,
    ledger: LedgerService = Depends(get_ledger)
):
    """Create a new tag."""
    result = check_result(ledger.create_tag(tag.name, tag.color, tag.suggest_id, skip_refresh=True))
    return ledger.store.tags.get(result.id)


@router.patch("/{tag_id}", response_model=TagResponse)
def update_tag(
    tag_id: str,
    update: TagUpdate,
    ledger: LedgerService = Depends(get_ledger)
):
    """Change a tag's color."""
    check_result(ledger.update_tag_color(tag_id, update.color, skip_refresh=True))
    return ledger.store.tags.get(tag_id)


@router.delete("/{tag_id}", response_model=MutationResponse)
def delete_tag(
    tag_id: str,
    ledger: LedgerService = Depends(get_ledger)
):
    """Soft-delete a tag."""
    check_result(ledger.delete_tag(tag_id, skip_refresh=True))
    return MutationResponse(success=True, id=tag_id)
