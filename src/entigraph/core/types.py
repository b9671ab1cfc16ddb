"""
Core type definitions for entigraph.

TreeNodes hold what the loaders discovered, DisplayNodes and DisplayEdges
hold what the display graph currently shows.
"""

import uuid
from enum import StrEnum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError


class DataSourceType(StrEnum):
    """Backing stores a loader can be built for."""
    DATABASE = "database"
    CSV = "csv"

    @classmethod
    def parse(cls, raw: str) -> "DataSourceType":
        try:
            return cls(raw.strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ConfigError(f"'{raw}' is not a supported data source type (choose one of: {choices})")


class ClickAction(StrEnum):
    """What a double-click on a display node ended up doing."""
    TOGGLED = "toggled"
    EXPANDED_CENTER = "expanded_center"
    EXPANDED_INFORMATION = "expanded_information"
    NOTHING_FOUND = "nothing_found"
    FAILED = "failed"


class TreeNode(BaseModel):
    """
    One discovered fact.

    A center node stands for an entity and expands into information nodes;
    an information node stands for an attribute value and expands into the
    center nodes that share it.
    """
    value: str
    header: str
    is_center: bool
    children: List["TreeNode"] = Field(default_factory=list)
    uid: str = Field(default_factory=lambda: uuid.uuid4().hex)

    model_config = ConfigDict(frozen=False, extra="ignore")

    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def role(self) -> str:
        return "center" if self.is_center else "information"

    def __hash__(self):
        return hash(self.uid)

    def __eq__(self, other):
        if isinstance(other, TreeNode):
            return self.uid == other.uid
        return False

    def __str__(self) -> str:
        return f"{self.header}={self.value}"


class DisplayNode(BaseModel):
    """Handle the presentation layer gets back for a unique label."""
    index: int
    label: str
    visible: bool = True

    def __hash__(self):
        return hash(self.index)


class DisplayEdge(BaseModel):
    """Unordered pair of display nodes."""
    source: int
    target: int
    visible: bool = True

    @property
    def key(self) -> Tuple[int, int]:
        return (min(self.source, self.target), max(self.source, self.target))


class LoaderSpec(BaseModel):
    """
    Everything a loader needs before it can answer queries.

    Column numbers are zero-based here; the configuration layer converts
    from the one-based numbers users write.
    """
    filter_template: str | None = None
    center_column: str | None = None
    center_column_number: int | None = None
    information_columns: Tuple[str, ...] = ()
    information_column_numbers: Tuple[int, ...] = ()
    column_names: Dict[int, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def header_for(self, column_number: int) -> str | None:
        return self.column_names.get(column_number)

    def column_for(self, header: str) -> int | None:
        """Reverse lookup of the column-to-name mapping."""
        for number, name in self.column_names.items():
            if name == header:
                return number
        return None


class ClickOutcome(BaseModel):
    """Structured result of a handled double-click."""
    action: ClickAction
    node: str
    new_nodes: int = 0
    new_edges: int = 0
    visible: bool | None = None
