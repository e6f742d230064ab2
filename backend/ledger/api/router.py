"""
Main API router.
"""

from fastapi import APIRouter
from ledger.api import groups, tags, entries, occurrences, recurring, feed, data

api_router = APIRouter()

api_router.include_router(feed.router)
api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(entries.router)
api_router.include_router(occurrences.router)
api_router.include_router(recurring.router)
api_router.include_router(data.router)
