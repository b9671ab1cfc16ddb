"""
Row sources for entigraph.

- SQLiteRowSource: relational store, filter compiled into a WHERE clause
- DelimitedFileSource: linear scan over a delimited text file
"""

from .base import Row, RowSource, TableRow
from .delimited import DelimitedFileSource
from .sqlite import SQLiteRowSource

__all__ = ["Row", "RowSource", "TableRow", "SQLiteRowSource", "DelimitedFileSource"]
