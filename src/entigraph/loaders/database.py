"""
Database loader.

Columns are addressed by name, both in the WHERE clause and when reading a
returned row, so the order the store returns columns in never matters.
"""

from typing import List

from ..core.errors import SetupError
from ..sources.base import Row
from .base import DataSourceLoader, Projection


class DatabaseLoader(DataSourceLoader):
    """Loader for relational row sources."""

    @property
    def name(self) -> str:
        return "database"

    def validate_spec(self) -> None:
        if not self.spec.filter_template or not self.spec.filter_template.strip():
            raise SetupError("You must set a base query before loading any data.")
        if not self.spec.center_column:
            raise SetupError("You must set a base column name before loading any data.")
        if not self.spec.information_columns:
            raise SetupError("You must set at least one information column before loading any data.")

    def center_projection(self) -> Projection:
        return (self.spec.center_column, self.spec.center_column)

    def information_projections(self) -> List[Projection]:
        return [(column, column) for column in self.spec.information_columns]

    def filter_key(self, header: str) -> str:
        return header

    def read(self, row: Row, key: str) -> str | None:
        return row.get_by_header(key)
