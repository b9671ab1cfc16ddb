"""
Row Source contract.

A row source answers one kind of question: which rows have `value` in
`column`. Loaders build everything else on top of that.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Protocol, Sequence

NULL_MARKERS = {"null"}


def normalize_cell(raw) -> str | None:
    """Read a raw cell as text; empty cells and 'null' read as None."""
    if raw is None:
        return None
    text = str(raw)
    if not text.strip() or text.strip().lower() in NULL_MARKERS:
        return None
    return text


class Row(Protocol):
    """A single record returned by a row source."""

    @property
    def headers(self) -> List[str]:
        ...

    def get_by_header(self, header: str) -> str | None:
        ...

    def get_by_position(self, index: int) -> str | None:
        ...


class TableRow:
    """Row backed by a list of values and the header list they align with."""

    __slots__ = ("_values", "_headers")

    def __init__(self, values: Sequence, headers: Sequence[str]):
        values = list(values)
        if len(values) < len(headers):
            values.extend([None] * (len(headers) - len(values)))
        self._values = [normalize_cell(v) for v in values]
        self._headers = list(headers)

    @property
    def headers(self) -> List[str]:
        return list(self._headers)

    def get_by_header(self, header: str) -> str | None:
        try:
            index = self._headers.index(header)
        except ValueError:
            return None
        return self.get_by_position(index)

    def get_by_position(self, index: int) -> str | None:
        if index < 0 or index >= len(self._values):
            return None
        return self._values[index]

    def has_header(self, header: str) -> bool:
        return header in self._headers

    def __repr__(self) -> str:
        return f"TableRow({dict(zip(self._headers, self._values))!r})"


class RowSource(ABC):
    """
    Abstract backing store.

    Implementations raise BackingStoreError for any I/O failure.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def query(self, filter_column: str | int | None, filter_value: str | None) -> Iterator[Row]:
        """Yield rows whose filter_column equals filter_value."""
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
