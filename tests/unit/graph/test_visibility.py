"""Unit tests for subtree visibility."""

import pytest

from entigraph.core.tree import EntityTree
from entigraph.graph.display import DisplayGraph
from entigraph.graph.visibility import VisibilityController


@pytest.fixture
def graph():
    alice = EntityTree.create_node("Alice", "Name", True)
    EntityTree.append_child(alice, EntityTree.create_node("Dr.", "Title", False))
    boston = EntityTree.create_node("Boston", "City", False)
    EntityTree.append_child(alice, boston)

    graph = DisplayGraph()
    graph.materialize_root(alice)
    for name in ("Bob", "Carol"):
        EntityTree.append_child(boston, EntityTree.create_node(name, "Name", True))
    graph.merge_subtree(graph.find("Boston"), boston)
    return graph


@pytest.fixture
def controller(graph):
    return VisibilityController(graph)


def visible(graph, *labels):
    return [graph.find(label).visible for label in labels]


class TestToggle:
    def test_collapse_then_expand(self, graph, controller):
        boston = graph.find("Boston")

        assert controller.toggle(boston) is False
        assert visible(graph, "Bob", "Carol") == [False, False]

        assert controller.toggle(boston) is True
        assert visible(graph, "Bob", "Carol") == [True, True]

    def test_siblings_are_untouched(self, graph, controller):
        controller.toggle(graph.find("Boston"))
        assert visible(graph, "Alice", "Dr.", "Boston") == [True, True, True]

    def test_leaf_has_no_state(self, graph, controller):
        assert controller.is_expanded(graph.find("Bob")) is None
        assert controller.toggle(graph.find("Bob")) is None
        assert graph.find("Bob").visible

    def test_collapsing_root_hides_everything_below(self, graph, controller):
        controller.toggle(graph.root)
        assert visible(graph, "Dr.", "Boston", "Bob", "Carol") == [False] * 4
        assert graph.root.visible
        assert graph.get_stats()["visible_edges"] == 0

    def test_state_reads_first_child(self, graph, controller):
        graph.set_visible(graph.find("Carol"), False)
        assert controller.is_expanded(graph.find("Boston")) is True


class TestEdges:
    def test_hidden_subtree_hides_its_edges(self, graph, controller):
        controller.toggle(graph.find("Boston"))

        assert not graph.get_edge(graph.find("Boston"), graph.find("Bob")).visible
        assert graph.get_edge(graph.root, graph.find("Boston")).visible

    def test_showing_restores_edges_between_visible_nodes(self, graph, controller):
        controller.toggle(graph.root)
        controller.toggle(graph.root)

        assert all(edge.visible for edge in graph.iter_edges())

    def test_merge_reveals_converged_hidden_node(self, graph, controller):
        controller.toggle(graph.find("Boston"))
        dr_tree = graph.resolve(graph.find("Dr."))
        EntityTree.append_child(dr_tree, EntityTree.create_node("Bob", "Name", True))

        graph.merge_subtree(graph.find("Dr."), dr_tree)

        assert graph.find("Bob").visible
        assert graph.get_edge(graph.find("Dr."), graph.find("Bob")).visible
        assert controller.is_expanded(graph.find("Dr.")) is True

    def test_children_of_hidden_parent_start_hidden(self, graph, controller):
        controller.toggle(graph.find("Boston"))
        carol_tree = graph.resolve(graph.find("Carol"))
        EntityTree.append_child(carol_tree, EntityTree.create_node("Ms.", "Title", False))

        graph.merge_subtree(graph.find("Carol"), carol_tree)

        assert not graph.find("Ms.").visible
        assert not graph.get_edge(graph.find("Carol"), graph.find("Ms.")).visible

    def test_set_subtree_visibility_returns_count(self, graph, controller):
        assert controller.set_subtree_visibility(graph.root, False) == 4

    def test_showing_ancestor_reveals_nested_collapse(self, graph, controller):
        controller.toggle(graph.find("Boston"))
        controller.toggle(graph.root)
        controller.toggle(graph.root)

        assert visible(graph, "Dr.", "Boston", "Bob", "Carol") == [True] * 4
        assert controller.is_expanded(graph.find("Boston")) is True
