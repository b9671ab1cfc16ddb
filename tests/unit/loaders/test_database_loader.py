"""Unit tests for the database loader and the shared expansion protocol."""

import pytest

from entigraph.core.errors import SetupError
from entigraph.core.tree import EntityTree
from entigraph.core.types import LoaderSpec
from entigraph.loaders.database import DatabaseLoader
from entigraph.sources.sqlite import SQLiteRowSource


@pytest.fixture
def loader(people_source, db_spec):
    return DatabaseLoader(people_source, db_spec)


def values(node):
    return [(c.value, c.header) for c in node.children]


class TestLoadRoot:
    def test_root_with_attributes(self, loader):
        root = loader.load_root("Alice")

        assert root.value == "Alice"
        assert root.header == "Name"
        assert root.is_center
        assert values(root) == [("Dr.", "Title"), ("Boston", "City")]
        assert all(not c.is_center for c in root.children)

    def test_attribute_order_follows_configuration(self, people_source):
        spec = LoaderSpec(
            filter_template="SELECT * FROM people WHERE",
            center_column="Name",
            information_columns=("City", "Title"),
        )
        root = DatabaseLoader(people_source, spec).load_root("Alice")
        assert values(root) == [("Boston", "City"), ("Dr.", "Title")]

    def test_no_matching_row(self, loader):
        with pytest.raises(SetupError, match="did not match any data"):
            loader.load_root("Zed")

    def test_null_attribute(self, loader):
        with pytest.raises(SetupError, match="null values"):
            loader.load_root("Eve")

    def test_seed_required(self, loader):
        with pytest.raises(SetupError, match="required"):
            loader.load_root(None)

    def test_queries_by_center_column(self, loader, people_source):
        loader.load_root("Alice")
        assert people_source.queries == [("Name", "Alice")]


class TestExpandCenter:
    def test_fan_out_is_capped(self, loader):
        root = loader.load_root("Alice")
        boston = root.children[1]

        loader.expand_center(boston, 2, "Boston", "City")

        assert values(boston) == [("Alice", "Name"), ("Bob", "Name")]
        assert all(c.is_center for c in boston.children)

    def test_cap_three_of_ten(self, make_source, db_spec):
        rows = [[f"Person {i}", "Mx.", "Springfield"] for i in range(10)]
        loader = DatabaseLoader(make_source(["Name", "Title", "City"], rows), db_spec)
        parent = EntityTree.create_node("Springfield", "City", False)

        loader.expand_center(parent, 3, "Springfield", "City")

        assert [c.value for c in parent.children] == ["Person 0", "Person 1", "Person 2"]

    def test_no_match_leaves_parent_childless(self, loader):
        parent = EntityTree.create_node("Atlantis", "City", False)
        assert loader.expand_center(parent, 7, "Atlantis", "City") is parent
        assert not parent.has_children()

    def test_zero_or_negative_cap(self, loader):
        for cap in (0, -3):
            parent = EntityTree.create_node("Boston", "City", False)
            loader.expand_center(parent, cap, "Boston", "City")
            assert not parent.has_children()

    def test_rows_without_center_value_are_skipped(self, make_source, db_spec):
        rows = [[None, "Dr.", "Boston"], ["Bob", "Mr.", "Boston"]]
        loader = DatabaseLoader(make_source(["Name", "Title", "City"], rows), db_spec)
        parent = EntityTree.create_node("Boston", "City", False)

        loader.expand_center(parent, 7, "Boston", "City")

        assert [c.value for c in parent.children] == ["Bob"]

    def test_children_are_fresh_nodes(self, loader):
        root = loader.load_root("Alice")
        boston = root.children[1]
        loader.expand_center(boston, 7, "Boston", "City")

        assert boston.children[0].value == root.value
        assert boston.children[0] is not root


class TestExpandInformation:
    def test_appends_attributes(self, loader):
        bob = EntityTree.create_node("Bob", "Name", True)
        loader.expand_information(bob, "Bob", "Name")
        assert values(bob) == [("Mr.", "Title"), ("Boston", "City")]

    def test_null_attribute_leaves_parent_unchanged(self, loader):
        eve = EntityTree.create_node("Eve", "Name", True)
        with pytest.raises(SetupError, match="expected 2 values, got 1"):
            loader.expand_information(eve, "Eve", "Name")
        assert not eve.has_children()

    def test_no_matching_row(self, loader):
        zed = EntityTree.create_node("Zed", "Name", True)
        with pytest.raises(SetupError, match="No information"):
            loader.expand_information(zed, "Zed", "Name")
        assert not zed.has_children()

    def test_information_parent_is_rejected(self, loader):
        boston = EntityTree.create_node("Boston", "City", False)
        with pytest.raises(ValueError):
            loader.expand_information(boston, "Alice", "Name")


class TestValidation:
    @pytest.mark.parametrize("spec", [
        LoaderSpec(center_column="Name", information_columns=("City",)),
        LoaderSpec(filter_template="   ", center_column="Name", information_columns=("City",)),
        LoaderSpec(filter_template="SELECT * FROM people WHERE", information_columns=("City",)),
        LoaderSpec(filter_template="SELECT * FROM people WHERE", center_column="Name"),
    ])
    def test_incomplete_spec(self, people_source, spec):
        loader = DatabaseLoader(people_source, spec)
        with pytest.raises(SetupError):
            loader.load_root("Alice")
        assert people_source.queries == []


class TestWithSQLite:
    def test_end_to_end(self, people_db, db_spec):
        with DatabaseLoader(SQLiteRowSource(people_db, db_spec.filter_template), db_spec) as loader:
            root = loader.load_root("Alice")
            boston = root.children[1]
            loader.expand_center(boston, 2, "Boston", "City")
            bob = boston.children[1]
            loader.expand_information(bob, bob.value, bob.header)

        assert values(root) == [("Dr.", "Title"), ("Boston", "City")]
        assert [c.value for c in boston.children] == ["Alice", "Bob"]
        assert values(bob) == [("Mr.", "Title"), ("Boston", "City")]

    def test_close_closes_source(self, people_source, db_spec):
        with DatabaseLoader(people_source, db_spec):
            pass
        assert people_source.closed
