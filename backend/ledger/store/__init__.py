"""
Entity store package.
"""

from ledger.store.base import EntityTable, LedgerStore
from ledger.store.sql import SqlTable, build_sql_store

__all__ = [
    "EntityTable",
    "LedgerStore",
    "SqlTable",
    "build_sql_store",
]
