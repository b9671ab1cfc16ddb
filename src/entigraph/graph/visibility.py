"""
Visibility Controller.

A display subtree is either EXPANDED (descendants shown) or COLLAPSED
(descendants hidden). Collapsing only hides; nothing is removed from the
display graph or the entity tree.
"""

import logging
from typing import Optional

from .display import DisplayGraph, NodeRef

logger = logging.getLogger(__name__)


class VisibilityController:
    """Shows and hides display subtrees."""

    def __init__(self, graph: DisplayGraph):
        self.graph = graph

    def is_expanded(self, display: NodeRef) -> Optional[bool]:
        """
        State of display's subtree, read from its first child only.

        Siblings share visibility, so one child is enough. Leaves have no
        state and return None.
        """
        children = self.graph.children(display)
        if not children:
            return None
        return children[0].visible

    def toggle(self, display: NodeRef) -> Optional[bool]:
        """Flip the subtree's state; returns True when it is now expanded."""
        state = self.is_expanded(display)
        if state is None:
            return None
        self.set_subtree_visibility(display, not state)
        return not state

    def set_subtree_visibility(self, display: NodeRef, visible: bool) -> int:
        """Show or hide every descendant and its edges. Returns the node count."""
        descendants = self.graph.descendants(display)
        for index in descendants:
            self.graph.set_visible(index, visible)

        for index in descendants:
            for edge in self.graph.incident_edges(index):
                shown = visible and (
                    self.graph.get_node(edge.source).visible
                    and self.graph.get_node(edge.target).visible
                )
                self.graph.set_edge_visible(edge.source, edge.target, shown)

        logger.debug(f"{'Showed' if visible else 'Hid'} {len(descendants)} nodes below {display!r}")
        return len(descendants)
