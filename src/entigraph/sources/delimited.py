"""
Delimited text file row source.

Raw files carry no schema, so headers come from an explicit column-to-name
mapping when one is configured, and from the file's first line otherwise.
Every query is a linear scan that starts by rewinding the file.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, TextIO

from ..core.errors import BackingStoreError
from .base import RowSource, TableRow

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","


class DelimitedFileSource(RowSource):
    """
    Row source over a small CSV (or other delimited) file.

    Args:
        file_path: Path to the file.
        column_names: Optional zero-based position -> header mapping.
        has_header: Whether the first line holds column titles.
        delimiter: Field separator.
    """

    def __init__(
        self,
        file_path: Path,
        column_names: Optional[Dict[int, str]] = None,
        has_header: bool = True,
        delimiter: str = DEFAULT_DELIMITER,
        encoding: str = "utf-8",
    ):
        self.file_path = Path(file_path)
        self.column_names = dict(column_names or {})
        self.has_header = has_header
        self.delimiter = delimiter
        self.encoding = encoding
        self._handle: Optional[TextIO] = None
        self._reader = None
        self._headers: List[str] = []
        self._validate_file()

    @property
    def name(self) -> str:
        return f"file:{self.file_path}"

    @property
    def headers(self) -> List[str]:
        if self._handle is None:
            self.reset()
        return list(self._headers)

    def _validate_file(self) -> None:
        if not self.file_path.exists() or not self.file_path.is_file():
            raise BackingStoreError(f"{self.file_path} is not a valid file.")

    def _open(self) -> None:
        try:
            self._handle = open(self.file_path, "r", encoding=self.encoding, newline="")
        except OSError as e:
            raise BackingStoreError(f"Could not open {self.file_path}: {e}") from e

    def reset(self) -> None:
        """Rewind to the first data row."""
        if self._handle is None:
            self._open()
        else:
            self._handle.seek(0)
        self._reader = csv.reader(self._handle, delimiter=self.delimiter)

        file_headers: List[str] = []
        if self.has_header:
            try:
                file_headers = [h.strip() for h in next(self._reader)]
            except StopIteration:
                file_headers = []
            except csv.Error as e:
                raise BackingStoreError(f"Malformed header in {self.file_path}: {e}") from e
        self._headers = self._resolve_headers(file_headers)

    def _resolve_headers(self, file_headers: List[str]) -> List[str]:
        if not self.column_names:
            return file_headers
        width = max(len(file_headers), max(self.column_names) + 1)
        headers = []
        for position in range(width):
            if position in self.column_names:
                headers.append(self.column_names[position])
            elif position < len(file_headers):
                headers.append(file_headers[position])
            else:
                headers.append(f"column_{position + 1}")
        return headers

    def next_row(self) -> Optional[TableRow]:
        """Read the next data row, or None at end of file."""
        if self._reader is None:
            self.reset()
        while True:
            try:
                values = next(self._reader)
            except StopIteration:
                return None
            except csv.Error as e:
                raise BackingStoreError(
                    f"Malformed line {self._reader.line_num} in {self.file_path}: {e}"
                ) from e
            if not values:
                continue
            return TableRow(values, self._headers)

    def _column_index(self, filter_column: str | int) -> int:
        if isinstance(filter_column, int):
            return filter_column
        try:
            return self._headers.index(filter_column)
        except ValueError:
            return -1

    def query(self, filter_column: str | int | None, filter_value: str | None) -> Iterator[TableRow]:
        """
        Scan the whole file for matching rows.

        A filter_column of None yields every row. A column that is not in
        the file matches nothing.
        """
        self.reset()
        index = None if filter_column is None else self._column_index(filter_column)
        logger.debug(f"{self.name}: scanning for column {filter_column!r} = {filter_value!r}")

        if index == -1:
            return

        while (row := self.next_row()) is not None:
            if index is None or row.get_by_position(index) == filter_value:
                yield row

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._reader = None
