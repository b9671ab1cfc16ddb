"""
SQLite row source.

The filter is compiled from a configured base statement:

- if the statement contains a ``{filter}`` placeholder it is replaced by
  ``"<column>" = ?``
- otherwise ``"<column>" = ?`` is appended, so a statement such as
  ``SELECT * FROM people WHERE`` works as-is

The filter value is always bound as a parameter.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from ..core.errors import BackingStoreError, SetupError
from .base import RowSource, TableRow

logger = logging.getLogger(__name__)

FILTER_PLACEHOLDER = "{filter}"


def quote_identifier(name: str) -> str:
    """Quote a column name as an SQL identifier."""
    return '"' + name.replace('"', '""') + '"'


class SQLiteRowSource(RowSource):
    """
    Read-only view over a SQLite database file.

    Each query opens its own connection, so the source holds no open handle
    between interactions.
    """

    def __init__(self, db_path: Path, base_query: str | None):
        self.db_path = Path(db_path)
        self.base_query = base_query

    @property
    def name(self) -> str:
        return f"sqlite:{self.db_path}"

    @contextmanager
    def _connection(self):
        """Context manager for read-only database connections."""
        if not self.db_path.is_file():
            raise BackingStoreError(f"Database file not found: {self.db_path}")
        try:
            conn = sqlite3.connect(f"file:{self.db_path.as_posix()}?mode=ro", uri=True)
        except sqlite3.Error as e:
            raise BackingStoreError(f"Could not open {self.db_path}: {e}") from e
        try:
            yield conn
        finally:
            conn.close()

    def compile_filter(self, filter_column: str) -> str:
        """Build the statement that selects rows where filter_column = ?."""
        if not self.base_query or not self.base_query.strip():
            raise SetupError("A base query is required before loading any data.")
        clause = f"{quote_identifier(filter_column)} = ?"
        if FILTER_PLACEHOLDER in self.base_query:
            return self.base_query.replace(FILTER_PLACEHOLDER, clause)
        return f"{self.base_query.rstrip()} {clause}"

    def query(self, filter_column: str | None, filter_value: str | None) -> Iterator[TableRow]:
        if not filter_column:
            raise SetupError("A filter column is required to query a database.")

        statement = self.compile_filter(filter_column)
        logger.debug(f"{self.name}: {statement} [{filter_value!r}]")

        with self._connection() as conn:
            try:
                cursor = conn.execute(statement, (filter_value,))
                headers: List[str] = [d[0] for d in cursor.description or ()]
                records = cursor.fetchall()
            except sqlite3.Error as e:
                raise BackingStoreError(f"Query failed on {self.name}: {e}") from e

        for record in records:
            yield TableRow(record, headers)
