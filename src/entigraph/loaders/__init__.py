"""
Data-source loaders for entigraph.

- DatabaseLoader: relational stores, columns addressed by name
- DelimitedLoader: delimited files, columns addressed by number
"""

from pathlib import Path

from ..config import Settings
from ..core.errors import SetupError
from ..core.types import DataSourceType
from ..sources.delimited import DelimitedFileSource
from ..sources.sqlite import SQLiteRowSource
from .base import DataSourceLoader
from .database import DatabaseLoader
from .delimited import DelimitedLoader

__all__ = ["DataSourceLoader", "DatabaseLoader", "DelimitedLoader", "create_loader"]


def create_loader(settings: Settings) -> DataSourceLoader:
    """Build the row source and loader selected by settings.datasource_type."""
    spec = settings.to_loader_spec()

    if settings.datasource_type == DataSourceType.DATABASE:
        if not settings.database_path:
            raise SetupError("The option database_path must be set for a database data source.")
        source = SQLiteRowSource(Path(settings.database_path), settings.base_query)
        return DatabaseLoader(source, spec)

    if settings.datasource_type == DataSourceType.CSV:
        if not settings.file_name:
            raise SetupError("The option file_name must be set for a csv data source.")
        source = DelimitedFileSource(
            Path(settings.file_name),
            column_names=settings.column_to_name_mapping,
            has_header=settings.has_header,
            delimiter=settings.delimiter,
        )
        return DelimitedLoader(source, spec)

    raise SetupError(f"'{settings.datasource_type}' is not a supported data source type.")
