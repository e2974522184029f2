"""
Composable SQLite queries and the generic paged query executor.

``SqlQuery`` is an immutable builder: every method returns a new query,
so a base query can be shared and refined per request.  Column names
are checked against the table's declared columns and all values travel
as parameters, never as SQL text.

``PagedQueryExecutor`` applies the pagination rules used by every list
endpoint: bounds checking, page size clamping, a default order on the
primary key, optional search filtering and a total count taken before
the page is cut.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .db import casefold, get_connection
from .exceptions import ValidationError
from . import messages

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGE_SIZE = 100


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class SqlQuery:
    """Immutable SELECT over a single table."""

    table: str
    columns: Tuple[str, ...]
    primary_key: str = "id"
    search_columns: Tuple[str, ...] = ()
    database_url: Optional[str] = None
    clauses: Tuple[str, ...] = ()
    params: Tuple[Any, ...] = ()
    ordering: Tuple[Tuple[str, bool], ...] = ()
    offset: int = 0
    limit: Optional[int] = None

    @property
    def is_ordered(self) -> bool:
        return bool(self.ordering)

    def _check_column(self, column: str) -> str:
        if column not in self.columns:
            raise ValueError(f"Unknown column '{column}' for table '{self.table}'")
        return column

    def filter_by(self, **conditions: Any) -> "SqlQuery":
        """Add equality conditions, skipping those whose value is ``None``."""
        clauses = list(self.clauses)
        params = list(self.params)
        for column, value in conditions.items():
            if value is None:
                continue
            clauses.append(f"{self._check_column(column)} = ?")
            params.append(value)
        return replace(self, clauses=tuple(clauses), params=tuple(params))

    def where_in(self, column: str, values: Iterable[Any]) -> "SqlQuery":
        values = list(values)
        if not values:
            # An empty IN list matches nothing.
            return replace(self, clauses=self.clauses + ("0 = 1",))
        placeholders = ", ".join("?" for _ in values)
        clause = f"{self._check_column(column)} IN ({placeholders})"
        return replace(self, clauses=self.clauses + (clause,), params=self.params + tuple(values))

    def search(self, term: str) -> "SqlQuery":
        """Case-insensitive substring match over the searchable columns."""
        if not self.search_columns:
            raise ValueError(f"Table '{self.table}' declares no searchable columns")
        pattern = f"%{escape_like(casefold(term.strip()))}%"
        clause = " OR ".join(
            f"casefold({self._check_column(column)}) LIKE ? ESCAPE '\\'"
            for column in self.search_columns
        )
        return replace(
            self,
            clauses=self.clauses + (f"({clause})",),
            params=self.params + (pattern,) * len(self.search_columns),
        )

    def order_by(self, column: str, descending: bool = False) -> "SqlQuery":
        return replace(self, ordering=self.ordering + ((self._check_column(column), descending),))

    def skip(self, count: int) -> "SqlQuery":
        return replace(self, offset=max(count, 0))

    def take(self, count: int) -> "SqlQuery":
        return replace(self, limit=max(count, 0))

    def _where_sql(self) -> str:
        return " WHERE " + " AND ".join(self.clauses) if self.clauses else ""

    def to_sql(self) -> Tuple[str, Tuple[Any, ...]]:
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table}{self._where_sql()}"
        params = list(self.params)
        if self.ordering:
            sql += " ORDER BY " + ", ".join(
                f"{column} {'DESC' if descending else 'ASC'}" for column, descending in self.ordering
            )
        if self.limit is not None or self.offset:
            sql += " LIMIT ? OFFSET ?"
            params.extend([self.limit if self.limit is not None else -1, self.offset])
        return sql, tuple(params)

    def count(self) -> int:
        """Number of matching rows, ignoring ordering and paging."""
        conn = get_connection(self.database_url)
        try:
            row = conn.execute(
                f"SELECT COUNT(*) AS count FROM {self.table}{self._where_sql()}",
                self.params,
            ).fetchone()
            return row["count"]
        finally:
            conn.close()

    def fetch_all(self) -> List[Dict[str, Any]]:
        sql, params = self.to_sql()
        conn = get_connection(self.database_url)
        try:
            rows = conn.execute(sql, params).fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()


class PagedQueryExecutor:
    """Runs a ``SqlQuery`` as one page of results plus the total count."""

    def __init__(self, max_page_size: int = DEFAULT_MAX_PAGE_SIZE) -> None:
        if max_page_size < 1:
            raise ValueError("max_page_size must be at least 1")
        self.max_page_size = max_page_size

    def effective_page_size(self, page_number: int, page_size: int) -> int:
        """Validate the paging parameters and return the clamped page size."""
        if page_number <= 0 or page_size <= 0:
            raise ValidationError(messages.PAGINATION_INVALID)
        return min(page_size, self.max_page_size)

    @staticmethod
    def check_search_term(search_term: Optional[str]) -> Optional[str]:
        """``None`` means no search; a blank term is rejected."""
        if search_term is None:
            return None
        if not search_term.strip():
            raise ValidationError(messages.SEARCH_TERM_BLANK, field="search_term", value=search_term)
        return search_term

    async def execute(
        self,
        query: SqlQuery,
        search_term: Optional[str],
        page_number: int,
        page_size: int,
    ) -> Tuple[List[Dict[str, Any]], int]:
        page_size = self.effective_page_size(page_number, page_size)
        search_term = self.check_search_term(search_term)

        if not query.is_ordered:
            query = query.order_by(query.primary_key)
        if search_term is not None:
            query = query.search(search_term)

        total_count = query.count()
        items = query.skip((page_number - 1) * page_size).take(page_size).fetch_all()
        logger.debug(
            "Fetched %s of %s row(s) from %s (page %s, size %s)",
            len(items), total_count, query.table, page_number, page_size,
        )
        return items, total_count
