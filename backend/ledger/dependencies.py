"""
FastAPI dependencies.
"""

from typing import Optional
from fastapi import Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from datetime import date

from ledger.config import settings
from ledger.database import get_db
from ledger.errors import LedgerError
from ledger.services.ledger_service import LedgerService, MutationResult
from ledger.store import LedgerStore, build_sql_store


def get_user_id(request: Request) -> Optional[str]:
    """Caller identity from the configured header, else the local default user."""
    return request.headers.get(settings.user_header) or settings.default_user_id


def get_store(
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_user_id)
) -> LedgerStore:
    return build_sql_store(db, user_id)


def get_ledger(
    store: LedgerStore = Depends(get_store),
    horizon: Optional[date] = Query(None, description="Last date unbounded series are projected to")
) -> LedgerService:
    return LedgerService(store, horizon=horizon)


def raise_for_error(error: LedgerError) -> None:
    raise HTTPException(status_code=error.status_code, detail=error.message)


def check_result(result: MutationResult) -> MutationResult:
    """Turn a failed mutation into the matching HTTP error."""
    if not result.success:
        raise_for_error(result.error)
    return result
