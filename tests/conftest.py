"""Shared fixtures: a small people dataset as SQLite, CSV and in-memory rows."""

import sqlite3
from typing import Dict, Iterator, List

import pytest
import yaml

from entigraph.core.types import LoaderSpec
from entigraph.sources.base import RowSource, TableRow

PEOPLE_HEADERS = ["Name", "Title", "City"]
PEOPLE_ROWS = [
    ["Alice", "Dr.", "Boston"],
    ["Bob", "Mr.", "Boston"],
    ["Carol", "Ms.", "Boston"],
    ["Dave", "Prof.", "Chicago"],
    ["Eve", None, "Denver"],
]


class ListRowSource(RowSource):
    """In-memory row source that records every query it answers."""

    def __init__(self, headers: List[str], rows: List[list]):
        self.headers = headers
        self.rows = rows
        self.queries = []
        self.closed = False

    @property
    def name(self) -> str:
        return "memory"

    def query(self, filter_column, filter_value) -> Iterator[TableRow]:
        self.queries.append((filter_column, filter_value))
        if isinstance(filter_column, int):
            index = filter_column
        elif filter_column is None:
            index = None
        else:
            index = self.headers.index(filter_column) if filter_column in self.headers else -1
        for values in self.rows:
            if index is None or (index >= 0 and index < len(values) and values[index] == filter_value):
                yield TableRow(values, self.headers)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def people_source() -> ListRowSource:
    return ListRowSource(PEOPLE_HEADERS, [list(r) for r in PEOPLE_ROWS])


@pytest.fixture
def db_spec() -> LoaderSpec:
    return LoaderSpec(
        filter_template="SELECT * FROM people WHERE",
        center_column="Name",
        information_columns=("Title", "City"),
    )


@pytest.fixture
def csv_spec() -> LoaderSpec:
    return LoaderSpec(
        center_column="Name",
        center_column_number=0,
        information_column_numbers=(1, 2),
        column_names={0: "Name", 1: "Title", 2: "City"},
    )


@pytest.fixture
def people_db(tmp_path):
    """SQLite database with a people table."""
    path = tmp_path / "people.db"
    conn = sqlite3.connect(path)
    conn.execute('CREATE TABLE people ("Name" TEXT, "Title" TEXT, "City" TEXT)')
    conn.executemany("INSERT INTO people VALUES (?, ?, ?)", PEOPLE_ROWS)
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def people_csv(tmp_path):
    """CSV file with a header row; Eve's title is empty."""
    path = tmp_path / "people.csv"
    lines = [",".join(PEOPLE_HEADERS)]
    for row in PEOPLE_ROWS:
        lines.append(",".join("" if v is None else v for v in row))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def make_source():
    """Factory for in-memory row sources."""
    return ListRowSource


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML config into tmp_path and return its path."""

    def _write(options: Dict[str, object], name: str = "entigraph.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(options, sort_keys=False), encoding="utf-8")
        return path

    return _write
