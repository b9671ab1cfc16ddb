"""Unit tests for configuration parsing."""

import logging

import pytest

from entigraph.config import (
    DEFAULT_CONFIG,
    DEFAULT_MAX_NODES,
    Settings,
    apply_options,
    load_settings,
    parse_bool,
    parse_column_number,
)
from entigraph.core.errors import ConfigError
from entigraph.core.types import DataSourceType
from entigraph.loaders.delimited import DelimitedLoader


class TestValueParsing:
    @pytest.mark.parametrize("raw, expected", [("true", True), ("Yes", True), ("0", False), ("off", False)])
    def test_parse_bool(self, raw, expected):
        assert parse_bool(raw) is expected

    def test_parse_bool_rejects_garbage(self):
        with pytest.raises(ConfigError):
            parse_bool("maybe")

    def test_column_numbers_are_one_based(self):
        assert parse_column_number(" 3 ") == 2

    @pytest.mark.parametrize("raw", ["0", "-2", "two"])
    def test_bad_column_number(self, raw):
        with pytest.raises(ConfigError):
            parse_column_number(raw)


class TestApplyOptions:
    def test_database_options(self):
        settings = apply_options(Settings(), {
            "datasource_type": "Database",
            "database_name": "people.db",
            "base_query": "SELECT * FROM people WHERE",
            "base_column_name": "Name",
            "children_columns": "Title, City",
            "default_max_nodes": 4,
            "use_tool_tip": True,
        })

        assert settings.datasource_type == DataSourceType.DATABASE
        assert settings.database_path == "people.db"
        assert settings.children_columns == ["Title", "City"]
        assert settings.default_max_nodes == 4
        assert settings.use_tool_tip is True

    def test_lists_are_accepted(self):
        settings = apply_options(Settings(), {"children_columns": ["Title", "City"]})
        assert settings.children_columns == ["Title", "City"]

    @pytest.mark.parametrize("raw", ["0", "-1", "lots"])
    def test_invalid_max_nodes_keeps_default(self, raw, caplog):
        with caplog.at_level(logging.WARNING, logger="entigraph.config"):
            settings = apply_options(Settings(), {"default_max_nodes": raw})
        assert settings.default_max_nodes == DEFAULT_MAX_NODES
        assert "default_max_nodes" in caplog.text

    def test_unknown_option_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="entigraph.config"):
            apply_options(Settings(), {"colour": "blue"})
        assert "colour" in caplog.text

    def test_none_values_are_skipped(self):
        settings = apply_options(Settings(first_node_entry="Alice"), {"first_node_entry": None})
        assert settings.first_node_entry == "Alice"

    def test_delimiter(self):
        assert apply_options(Settings(), {"delimiter": "tab"}).delimiter == "\t"
        with pytest.raises(ConfigError):
            apply_options(Settings(), {"delimiter": "::"})

    def test_unknown_datasource_type(self):
        with pytest.raises(ConfigError, match="xml"):
            apply_options(Settings(), {"datasource_type": "xml"})

    def test_csv_starter_config_is_consistent(self, make_source):
        settings = apply_options(Settings(), DEFAULT_CONFIG["csv"])
        spec = settings.to_loader_spec()

        assert spec.center_column_number == 1
        assert spec.information_column_numbers == (0, 4, 5)
        assert spec.header_for(1) == "President"
        DelimitedLoader(make_source([], []), spec).validate_spec()


class TestLoadSettings:
    def test_from_file_with_overrides(self, write_config):
        path = write_config({"datasource_type": "database", "first_node_entry": "Alice", "default_max_nodes": 3})
        settings = load_settings(path, {"first_node_entry": "Bob"})

        assert settings.first_node_entry == "Bob"
        assert settings.default_max_nodes == 3

    def test_default_file_in_working_directory(self, write_config, tmp_path, monkeypatch):
        write_config({"datasource_type": "csv"})
        monkeypatch.chdir(tmp_path)
        assert load_settings().datasource_type == DataSourceType.CSV

    def test_datasource_type_is_required(self, write_config):
        with pytest.raises(ConfigError, match="datasource_type"):
            load_settings(write_config({"first_node_entry": "Alice"}))

    def test_overrides_alone(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_settings(None, {"datasource_type": "csv"}).datasource_type == DataSourceType.CSV

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not a valid"):
            load_settings(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("datasource_type: [csv\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Could not parse"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- csv\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)
