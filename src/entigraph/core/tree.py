"""
Entity Tree Model.

The tree is pure data: one root per session, nodes created by loaders and
only ever grown by appending children. Collapsing a subtree in the display
never removes anything from here.
"""

from typing import List, Optional

from .types import TreeNode


class EntityTree:
    """Ordered, rooted, multi-child tree of discovered facts."""

    def __init__(self):
        self._root: Optional[TreeNode] = None

    @property
    def root(self) -> Optional[TreeNode]:
        return self._root

    def set_root(self, node: TreeNode) -> TreeNode:
        """Set the root once; later calls keep the first root."""
        if self._root is None:
            self._root = node
        return self._root

    @staticmethod
    def create_node(value: str, header: str, is_center: bool) -> TreeNode:
        return TreeNode(value=value, header=header, is_center=is_center)

    @staticmethod
    def append_child(parent: TreeNode, child: TreeNode) -> None:
        """
        Append child to parent.

        Center nodes only take information children and vice versa.

        Raises:
            ValueError: if parent is None or the roles do not alternate.
        """
        if parent is None:
            raise ValueError("Cannot append a child to a missing parent")
        if child.is_center == parent.is_center:
            raise ValueError(
                f"{child.role} node '{child.value}' cannot be a child of "
                f"{parent.role} node '{parent.value}'"
            )
        parent.children.append(child)

    @staticmethod
    def has_children(node: TreeNode) -> bool:
        return node.has_children()

    @staticmethod
    def children_of(node: TreeNode) -> List[TreeNode]:
        return list(node.children)
