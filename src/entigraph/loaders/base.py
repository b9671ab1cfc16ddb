"""
Data-Source Loader protocol.

Every loader answers three requests:

- load_root: the seed entity and its attributes
- expand_information: a center node's attributes
- expand_center: the center nodes sharing an attribute value

Query construction and row-to-node mapping live here; variants only say how
a configured column is addressed in a row and in a filter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from ..core.errors import SetupError
from ..core.tree import EntityTree
from ..core.types import LoaderSpec, TreeNode
from ..sources.base import Row, RowSource

# (how the row is read, header shown to the user)
Projection = Tuple[Any, str]


class DataSourceLoader(ABC):
    """
    Abstract Base Class for all data-source loaders.

    A loader owns its row source. Children are only appended to a parent once
    every value for them has been read and validated, so a failed expansion
    leaves the parent exactly as it was.
    """

    # Whether load_root(None) may start from the first row of the source.
    seeds_from_first_row: bool = False

    def __init__(self, source: RowSource, spec: LoaderSpec):
        self.source = source
        self.spec = spec
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def validate_spec(self) -> None:
        """Raise SetupError if the configured columns cannot drive any query."""
        pass

    @abstractmethod
    def center_projection(self) -> Projection:
        pass

    @abstractmethod
    def information_projections(self) -> List[Projection]:
        """Attribute columns, in configured order."""
        pass

    @abstractmethod
    def filter_key(self, header: str) -> Any:
        """Translate a node header into the row source's filter column."""
        pass

    @abstractmethod
    def read(self, row: Row, key: Any) -> str | None:
        pass

    # --- Expansion protocol ---

    def load_root(self, seed_value: str | None) -> TreeNode:
        """
        Build the center node for seed_value with one information child per
        configured attribute column.

        Raises:
            SetupError: incomplete column configuration, no matching row, or a null attribute.
        """
        self.validate_spec()
        center_key, center_header = self.center_projection()

        if seed_value is None:
            if not self.seeds_from_first_row:
                raise SetupError(f"A value for {center_header} is required to load the first node.")
            row = self._fetch_one(None, None)
        else:
            row = self._fetch_one(self.filter_key(center_header), seed_value)
        if row is None:
            raise SetupError(
                "The information provided to set up the graph did not match any data: "
                f"no row where {center_header} = {seed_value!r}."
            )

        value = seed_value if seed_value is not None else self.read(row, center_key)
        if value is None:
            raise SetupError(f"The first row of {self.source.name} has no value for {center_header}.")

        root = EntityTree.create_node(value, center_header, True)
        for child in self._information_children(row):
            EntityTree.append_child(root, child)

        self._logger.info(f"Loaded root '{root.value}' with {root.child_count} attributes")
        return root

    def expand_information(self, parent: TreeNode, value: str, header: str) -> TreeNode:
        """Append the attributes of the row where header = value to parent."""
        self.validate_spec()

        row = self._fetch_one(self.filter_key(header), value)
        if row is None:
            raise SetupError(f"No information found for {header} = {value!r}.")

        children = self._information_children(row)
        for child in children:
            EntityTree.append_child(parent, child)

        self._logger.debug(f"Expanded center '{value}' into {len(children)} attributes")
        return parent

    def expand_center(self, parent: TreeNode, max_children: int, value: str, header: str) -> TreeNode:
        """
        Append up to max_children center nodes sharing header = value.

        Extra matches are dropped silently; no match leaves parent childless.
        """
        self.validate_spec()
        center_key, center_header = self.center_projection()
        limit = max(max_children, 0)

        children: List[TreeNode] = []
        seen_rows = 0
        for row in self.source.query(self.filter_key(header), value):
            seen_rows += 1
            if len(children) >= limit:
                self._logger.debug(f"Fan-out cap of {limit} reached for {header} = {value!r}")
                break
            center_value = self.read(row, center_key)
            if center_value is None:
                continue
            children.append(EntityTree.create_node(center_value, center_header, True))

        for child in children:
            EntityTree.append_child(parent, child)

        self._logger.debug(
            f"Expanded information '{value}' into {len(children)} entities ({seen_rows} rows read)"
        )
        return parent

    # --- Helpers ---

    def _fetch_one(self, filter_column: Any, filter_value: str | None) -> Optional[Row]:
        rows = self.source.query(filter_column, filter_value)
        try:
            return next(iter(rows), None)
        finally:
            close = getattr(rows, "close", None)
            if close is not None:
                close()

    def _information_children(self, row: Row) -> List[TreeNode]:
        children: List[TreeNode] = []
        missing: List[str] = []
        for key, header in self.information_projections():
            value = self.read(row, key)
            if value is None:
                missing.append(header)
                continue
            children.append(EntityTree.create_node(value, header, False))

        if missing:
            raise SetupError(
                f"There are null values in the data you want displayed ({', '.join(missing)}); "
                f"expected {len(self.information_projections())} values, got {len(children)}."
            )
        return children

    def close(self) -> None:
        self.source.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
