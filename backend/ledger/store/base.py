"""
Store contract consumed by the ledger engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class EntityTable(ABC):
    """Soft-delete aware CRUD over one entity kind."""

    name: str = ""

    @abstractmethod
    def list(
        self,
        include_deleted: bool = False,
        order_by: Optional[str] = None,
        **filters: Any
    ) -> List[Any]:
        """
        Return rows matching the filters.
        A filter value that is a list/tuple/set matches any of its items,
        None matches NULL.
        """
        pass

    @abstractmethod
    def get(self, row_id: str) -> Optional[Any]:
        """Return a row by id, deleted or not"""
        pass

    @abstractmethod
    def insert(self, fields: Dict[str, Any]) -> str:
        """Insert a row and return its id"""
        pass

    @abstractmethod
    def update(self, row_id: str, fields: Dict[str, Any]) -> bool:
        """Apply a partial update. Returns False if the row does not exist"""
        pass

    @abstractmethod
    def purge(self) -> int:
        """Hard-delete every row visible to this table. Returns the count"""
        pass

    def soft_delete(self, row_id: str) -> bool:
        return self.update(row_id, {"is_deleted": True})


class LedgerStore:
    """The five tables the ledger engine works with, scoped to one owner."""

    def __init__(
        self,
        groups: EntityTable,
        tags: EntityTable,
        entries: EntityTable,
        recurring_configs: EntityTable,
        exclusions: EntityTable,
        user_id: Optional[str] = None
    ):
        self.groups = groups
        self.tags = tags
        self.entries = entries
        self.recurring_configs = recurring_configs
        self.exclusions = exclusions
        self.user_id = user_id

    def tables(self) -> List[EntityTable]:
        """Tables in dependency order, referencing rows first."""
        return [
            self.exclusions,
            self.entries,
            self.recurring_configs,
            self.groups,
            self.tags,
        ]
