"""
Table-level data access for the directory entities.

``SqliteRepository`` wraps one table with the primitives the entity
services need: insert, update and delete by id, lookups, existence
checks and a base ``SqlQuery`` for listing.  All statements are
parameterised; column names come from the repository's own declaration.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from .db import get_connection
from .query import SqlQuery

logger = logging.getLogger(__name__)


class SqliteRepository:
    """Data access for a single table with an integer ``id`` primary key."""

    def __init__(
        self,
        table: str,
        columns: Sequence[str],
        search_columns: Sequence[str] = (),
        database_url: Optional[str] = None,
    ) -> None:
        if "id" not in columns:
            raise ValueError(f"Table '{table}' must declare an 'id' column")
        self.table = table
        self.columns = tuple(columns)
        self.search_columns = tuple(search_columns)
        self.database_url = database_url
        for column in self.search_columns:
            self._check_column(column)

    def _check_column(self, column: str) -> str:
        if column not in self.columns:
            raise ValueError(f"Unknown column '{column}' for table '{self.table}'")
        return column

    def query(self) -> SqlQuery:
        return SqlQuery(
            table=self.table,
            columns=self.columns,
            search_columns=self.search_columns,
            database_url=self.database_url,
        )

    def find(self, entity_id: int) -> Optional[Dict[str, Any]]:
        conn = get_connection(self.database_url)
        try:
            row = conn.execute(
                f"SELECT {', '.join(self.columns)} FROM {self.table} WHERE id = ?",
                (entity_id,),
            ).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def exists(self, entity_id: int) -> bool:
        conn = get_connection(self.database_url)
        try:
            row = conn.execute(
                f"SELECT 1 FROM {self.table} WHERE id = ?", (entity_id,)
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def exists_ci(self, column: str, value: str, exclude_id: Optional[int] = None) -> bool:
        """Case-insensitive (Unicode case folding), trimmed equality check on a text column."""
        sql = f"SELECT 1 FROM {self.table} WHERE casefold(TRIM({self._check_column(column)})) = casefold(TRIM(?))"
        params: list = [value]
        if exclude_id is not None:
            sql += " AND id <> ?"
            params.append(exclude_id)
        conn = get_connection(self.database_url)
        try:
            return conn.execute(sql + " LIMIT 1", tuple(params)).fetchone() is not None
        finally:
            conn.close()

    def count_where(self, column: str, value: Any) -> int:
        return self.query().filter_by(**{column: value}).count()

    def count_existing(self, ids: Iterable[int]) -> int:
        return self.query().where_in("id", set(ids)).count()

    def insert(self, values: Dict[str, Any]) -> int:
        names = [self._check_column(name) for name in values if name != "id"]
        placeholders = ", ".join("?" for _ in names)
        conn = get_connection(self.database_url)
        try:
            cursor = conn.execute(
                f"INSERT INTO {self.table} ({', '.join(names)}) VALUES ({placeholders})",
                tuple(values[name] for name in names),
            )
            conn.commit()
            return cursor.lastrowid
        finally:
            conn.close()

    def update(self, entity_id: int, values: Dict[str, Any]) -> int:
        """Overwrite the given columns.  Returns the number of affected rows."""
        names = [self._check_column(name) for name in values if name != "id"]
        if not names:
            return 1 if self.exists(entity_id) else 0
        assignments = ", ".join(f"{name} = ?" for name in names)
        conn = get_connection(self.database_url)
        try:
            cursor = conn.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                tuple(values[name] for name in names) + (entity_id,),
            )
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    def delete(self, entity_id: int) -> int:
        conn = get_connection(self.database_url)
        try:
            cursor = conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (entity_id,))
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()
