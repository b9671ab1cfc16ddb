"""
Exploration session and interaction dispatcher.

A session owns the single entity tree, the loader, the display graph and the
visibility controller. Each double-click is handled synchronously:

    display node -> TreeNode
      has children      -> toggle subtree visibility
      center node       -> expand_information, then merge
      information node  -> expand_center, then merge

Loader failures are recovered here and returned as Err; the tree and the
display graph are left as they were before the click.
"""

import logging
from typing import Optional

from .config import Settings
from .core.errors import SetupError
from .core.result import Err, Ok, Result
from .core.tree import EntityTree
from .core.types import ClickAction, ClickOutcome, DisplayNode
from .graph.display import DisplayGraph, NodeRef
from .graph.visibility import VisibilityController
from .loaders import DataSourceLoader, create_loader

logger = logging.getLogger(__name__)


class ExplorationSession:
    """
    One tree per running instance.

    Args:
        loader: The data-source loader to pull facts from.
        max_nodes: Fan-out cap for expanding an information node.
        use_tool_tip: Whether hovering returns the node's header.
    """

    def __init__(self, loader: DataSourceLoader, max_nodes: int = 7, use_tool_tip: bool = False):
        self.loader = loader
        self.max_nodes = max_nodes
        self.use_tool_tip = use_tool_tip
        self.tree = EntityTree()
        self.graph = DisplayGraph()
        self.visibility = VisibilityController(self.graph)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExplorationSession":
        return cls(
            create_loader(settings),
            max_nodes=settings.default_max_nodes,
            use_tool_tip=settings.use_tool_tip,
        )

    def start(self, seed_value: Optional[str]) -> DisplayNode:
        """
        Load the root and put it on the display graph.

        Raises:
            SetupError: if the root cannot be loaded; there is nothing to
                recover to at this point.
        """
        if self.tree.root is not None:
            return self.graph.root
        root = self.loader.load_root(seed_value)
        self.tree.set_root(root)
        return self.graph.materialize_root(root)

    # --- Interaction surface ---

    def on_node_double_clicked(self, display: NodeRef) -> Result[ClickOutcome, SetupError]:
        tree_node = self.graph.resolve(display)
        label = tree_node.value

        if not self.graph.is_visible(display):
            return Err(SetupError(f"'{label}' is inside a collapsed subtree; expand its parent first."))

        if tree_node.has_children():
            visible = self.visibility.toggle(display)
            return Ok(ClickOutcome(action=ClickAction.TOGGLED, node=label, visible=visible))

        try:
            if tree_node.is_center:
                self.loader.expand_information(tree_node, tree_node.value, tree_node.header)
                action = ClickAction.EXPANDED_INFORMATION
            else:
                self.loader.expand_center(tree_node, self.max_nodes, tree_node.value, tree_node.header)
                action = ClickAction.EXPANDED_CENTER
        except SetupError as e:
            logger.error(f"Could not expand '{label}': {e}")
            return Err(e)

        if not tree_node.has_children():
            logger.info(f"Nothing related to '{label}' was found")
            return Ok(ClickOutcome(action=ClickAction.NOTHING_FOUND, node=label))

        stats = self.graph.merge_subtree(display, tree_node)
        return Ok(ClickOutcome(
            action=action,
            node=label,
            new_nodes=stats.new_nodes,
            new_edges=stats.new_edges,
            visible=True,
        ))

    def on_node_hover_enter(self, display: NodeRef) -> Optional[str]:
        """Tooltip text for display: the header its value came from."""
        if not self.use_tool_tip:
            return None
        return self.graph.resolve(display).header

    def on_node_hover_exit(self, display: NodeRef) -> None:
        return None

    # --- Label-based helpers for text front-ends ---

    def click(self, label: str) -> Result[ClickOutcome, SetupError]:
        display = self.graph.find(label)
        if display is None:
            return Err(SetupError(f"There is no node labelled '{label}' in the graph."))
        return self.on_node_double_clicked(display)

    def hover(self, label: str) -> Optional[str]:
        display = self.graph.find(label)
        if display is None:
            return None
        return self.on_node_hover_enter(display)

    def close(self) -> None:
        self.loader.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
