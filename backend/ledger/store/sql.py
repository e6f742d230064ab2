"""
SQLAlchemy implementation of the store contract.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger.errors import StoreUnavailable
from ledger.models import EntryGroup, EntryTag, Entry, RecurringConfig, Exclusion
from ledger.store.base import EntityTable, LedgerStore

logger = logging.getLogger(__name__)


class SqlTable(EntityTable):
    """
    One model's rows, optionally restricted to a single owner.

    Every write commits immediately. Multi-step ledger mutations therefore
    have no enclosing transaction.
    """

    def __init__(self, db: Session, model, user_id: Optional[str] = None):
        self.db = db
        self.model = model
        self.user_id = user_id
        self.name = model.__tablename__

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store {action} on {self.name} failed: {e}")
            raise StoreUnavailable(f"Could not {action} {self.name}") from e

    def _query(self):
        query = self.db.query(self.model)
        if self.user_id is not None:
            query = query.filter(self.model.user_id == self.user_id)
        return query

    def list(
        self,
        include_deleted: bool = False,
        order_by: Optional[str] = None,
        **filters: Any
    ) -> List[Any]:
        with self._guard("list"):
            query = self._query()
            if not include_deleted:
                query = query.filter(self.model.is_deleted == False)

            for field, value in filters.items():
                column = getattr(self.model, field)
                if isinstance(value, (list, tuple, set)):
                    query = query.filter(column.in_(list(value)))
                elif value is None:
                    query = query.filter(column.is_(None))
                else:
                    query = query.filter(column == value)

            if order_by:
                query = query.order_by(getattr(self.model, order_by), self.model.created_at)
            return query.all()

    def get(self, row_id: str) -> Optional[Any]:
        with self._guard("get"):
            return self._query().filter(self.model.id == row_id).first()

    def insert(self, fields: Dict[str, Any]) -> str:
        with self._guard("insert into"):
            row = self.model(**fields)
            if self.user_id is not None:
                row.user_id = self.user_id
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row.id

    def update(self, row_id: str, fields: Dict[str, Any]) -> bool:
        with self._guard("update"):
            row = self._query().filter(self.model.id == row_id).first()
            if row is None:
                return False
            for field, value in fields.items():
                setattr(row, field, value)
            self.db.commit()
            return True

    def purge(self) -> int:
        with self._guard("purge"):
            count = self._query().delete(synchronize_session=False)
            self.db.commit()
            return count


def build_sql_store(db: Session, user_id: Optional[str] = None) -> LedgerStore:
    """Create a store backed by the given session."""
    return LedgerStore(
        groups=SqlTable(db, EntryGroup, user_id),
        tags=SqlTable(db, EntryTag, user_id),
        entries=SqlTable(db, Entry, user_id),
        recurring_configs=SqlTable(db, RecurringConfig, user_id),
        exclusions=SqlTable(db, Exclusion, user_id),
        user_id=user_id,
    )
