"""
Display graph backed by rustworkx.

It manages:
- The identity map between display node indices and TreeNodes.
- A case-insensitive label index: one display node per label.
- Edge deduplication over unordered pairs.
- The BFS spanning tree that defines a node's display subtree.

The entity tree is a tree; the display graph is not. A value reached through
two expansion paths converges on one display node with two edges.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

import rustworkx as rx

from ..core.types import DisplayEdge, DisplayNode, TreeNode

logger = logging.getLogger(__name__)

NodeRef = Union[DisplayNode, int]


@dataclass
class MergeStats:
    """What a merge added to the display graph."""
    new_nodes: int = 0
    new_edges: int = 0

    def __add__(self, other: "MergeStats") -> "MergeStats":
        return MergeStats(self.new_nodes + other.new_nodes, self.new_edges + other.new_edges)


def label_key(label: str) -> str:
    """Identity key for a display label."""
    return label.casefold()


class DisplayGraph:
    """
    Mutable display graph kept consistent with the entity tree.

    Features:
    - O(1) resolve from display node to TreeNode
    - O(1) lookup of an existing display node by label
    - No duplicate labels, no duplicate edges, no self-loops
    """

    def __init__(self):
        self._graph = rx.PyGraph(multigraph=False)
        self._tree_by_index: Dict[int, TreeNode] = {}
        self._index_by_uid: Dict[str, int] = {}
        self._index_by_label: Dict[str, int] = {}
        self._root_index: Optional[int] = None
        self._spanning: Optional[Dict[int, List[int]]] = None

    # --- Synchronization ---

    def materialize_root(self, root: TreeNode) -> DisplayNode:
        """
        Create display nodes for the root and its immediate children.

        Only the first call has an effect.
        """
        if self._root_index is not None:
            return self._graph[self._root_index]

        self._root_index = self._add_display_node(root)
        root_display = self._graph[self._root_index]
        stats = self.merge_subtree(root_display, root)
        logger.debug(f"Materialized root '{root.value}' with {stats.new_nodes} children")
        return root_display

    def merge_subtree(self, parent: NodeRef, expanded: TreeNode) -> MergeStats:
        """
        Reconcile the children of expanded into the graph under parent.

        Unseen labels get a new display node and an edge; labels already in
        the graph only get an edge, and only if the pair is not connected yet.
        Children take the parent's visibility, so under a visible parent the
        merged subtree starts expanded, converged nodes included.
        """
        parent_index = self._index_of(parent)
        parent_visible = self._graph[parent_index].visible
        stats = MergeStats()

        for child in expanded.children:
            existing = self._index_by_label.get(label_key(child.value))
            if existing is None:
                index = self._add_display_node(child, visible=parent_visible)
                stats.new_nodes += 1
            else:
                index = existing
            if self._connect(parent_index, index):
                stats.new_edges += 1
            if parent_visible and index != parent_index:
                self._graph[index].visible = True
                self._graph.get_edge_data(parent_index, index).visible = True

        if stats.new_nodes or stats.new_edges:
            self._spanning = None
        logger.debug(
            f"Merged '{expanded.value}': {stats.new_nodes} new nodes, {stats.new_edges} new edges"
        )
        return stats

    def resolve(self, display: NodeRef) -> TreeNode:
        """
        Return the TreeNode a display node stands for.

        Raises:
            KeyError: if the display node is not part of this graph.
        """
        return self._tree_by_index[self._index_of(display)]

    def display_for(self, tree_node: TreeNode) -> Optional[DisplayNode]:
        """Display node created for tree_node, if any."""
        index = self._index_by_uid.get(tree_node.uid)
        return None if index is None else self._graph[index]

    def find(self, label: str) -> Optional[DisplayNode]:
        """Case-insensitive lookup by label."""
        index = self._index_by_label.get(label_key(label))
        return None if index is None else self._graph[index]

    # --- Internals ---

    def _index_of(self, display: NodeRef) -> int:
        index = display.index if isinstance(display, DisplayNode) else display
        if index not in self._tree_by_index:
            raise KeyError(f"Unknown display node: {display!r}")
        return index

    def _add_display_node(self, tree_node: TreeNode, visible: bool = True) -> int:
        node = DisplayNode(index=-1, label=tree_node.value, visible=visible)
        index = self._graph.add_node(node)
        node.index = index
        self._tree_by_index[index] = tree_node
        self._index_by_uid[tree_node.uid] = index
        self._index_by_label[label_key(tree_node.value)] = index
        return index

    def _connect(self, a: int, b: int) -> bool:
        if a == b or self._graph.has_edge(a, b):
            return False
        visible = self._graph[a].visible and self._graph[b].visible
        self._graph.add_edge(a, b, DisplayEdge(source=a, target=b, visible=visible))
        return True

    # --- Display subtrees ---

    def spanning_tree(self) -> Dict[int, List[int]]:
        """
        BFS spanning tree from the root: index -> child indices.

        Neighbors are visited in creation order, so a node's children are the
        nodes first reached through it.
        """
        if self._spanning is not None:
            return self._spanning

        children: Dict[int, List[int]] = {index: [] for index in self._tree_by_index}
        if self._root_index is None:
            return children

        visited = {self._root_index}
        queue = deque([self._root_index])
        while queue:
            current = queue.popleft()
            for neighbor in sorted(self._graph.neighbors(current)):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                children[current].append(neighbor)
                queue.append(neighbor)

        self._spanning = children
        return children

    def children(self, display: NodeRef) -> List[DisplayNode]:
        index = self._index_of(display)
        return [self._graph[i] for i in self.spanning_tree().get(index, [])]

    def descendants(self, display: NodeRef) -> List[int]:
        """All indices below display in its subtree, pre-order."""
        tree = self.spanning_tree()
        result: List[int] = []
        stack = list(reversed(tree.get(self._index_of(display), [])))
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(tree.get(current, [])))
        return result

    # --- Visibility state ---

    def is_visible(self, display: NodeRef) -> bool:
        return self._graph[self._index_of(display)].visible

    def set_visible(self, display: NodeRef, visible: bool) -> None:
        self._graph[self._index_of(display)].visible = visible

    def set_edge_visible(self, a: NodeRef, b: NodeRef, visible: bool) -> None:
        edge = self.get_edge(a, b)
        if edge is None:
            raise KeyError(f"No edge between {a!r} and {b!r}")
        edge.visible = visible

    def incident_edges(self, display: NodeRef) -> List[DisplayEdge]:
        index = self._index_of(display)
        return [self._graph.get_edge_data(index, n) for n in self._graph.neighbors(index)]

    # --- Queries ---

    @property
    def root(self) -> Optional[DisplayNode]:
        return None if self._root_index is None else self._graph[self._root_index]

    def get_node(self, index: int) -> Optional[DisplayNode]:
        if index not in self._tree_by_index:
            return None
        return self._graph[index]

    def has_edge(self, a: NodeRef, b: NodeRef) -> bool:
        return self._graph.has_edge(self._index_of(a), self._index_of(b))

    def get_edge(self, a: NodeRef, b: NodeRef) -> Optional[DisplayEdge]:
        if not self.has_edge(a, b):
            return None
        return self._graph.get_edge_data(self._index_of(a), self._index_of(b))

    def iter_nodes(self) -> Iterator[DisplayNode]:
        return iter(sorted(self._graph.nodes(), key=lambda n: n.index))

    def iter_edges(self) -> Iterator[DisplayEdge]:
        return iter(self._graph.edges())

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def get_stats(self) -> Dict[str, Any]:
        centers = sum(1 for t in self._tree_by_index.values() if t.is_center)
        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "visible_nodes": sum(1 for n in self.iter_nodes() if n.visible),
            "visible_edges": sum(1 for e in self.iter_edges() if e.visible),
            "center_nodes": centers,
            "information_nodes": self.node_count - centers,
            "backend": "rustworkx",
        }

    def to_dict(self, include_hidden: bool = True) -> Dict[str, Any]:
        nodes = []
        for node in self.iter_nodes():
            if not include_hidden and not node.visible:
                continue
            tree_node = self._tree_by_index[node.index]
            nodes.append({
                "id": node.index,
                "label": node.label,
                "header": tree_node.header,
                "role": tree_node.role,
                "visible": node.visible,
                "expanded": tree_node.has_children(),
            })
        edges = [
            edge.model_dump()
            for edge in self.iter_edges()
            if include_hidden or edge.visible
        ]
        return {"nodes": nodes, "edges": edges, "stats": self.get_stats()}
