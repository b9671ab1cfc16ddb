"""
Configuration for entigraph sessions.

Options arrive as plain key/value pairs, from a YAML file and from command
line overrides, and are applied through OPTION_SETTERS: one typed setter per
recognised key. Unknown keys are logged and skipped.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field

from .core.errors import ConfigError
from .core.types import DataSourceType, LoaderSpec

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "entigraph.yaml"
DEFAULT_MAX_NODES = 7
LIST_DELIMITER = ","

TRUE_VALUES = {"true", "yes", "1", "on"}
FALSE_VALUES = {"false", "no", "0", "off", ""}


class Settings(BaseModel):
    """Everything a session needs, after parsing."""

    default_max_nodes: int = DEFAULT_MAX_NODES
    use_tool_tip: bool = False
    datasource_type: Optional[DataSourceType] = None
    first_node_entry: Optional[str] = None

    # database
    database_path: Optional[str] = None
    base_query: Optional[str] = None
    base_column_name: Optional[str] = None
    children_columns: List[str] = Field(default_factory=list)

    # csv (column numbers stored zero-based)
    file_name: Optional[str] = None
    center_node_column_name: Optional[str] = None
    center_node_column_number: Optional[int] = None
    column_to_name_mapping: Dict[int, str] = Field(default_factory=dict)
    information_node_column_numbers: List[int] = Field(default_factory=list)
    has_header: bool = True
    delimiter: str = LIST_DELIMITER

    def to_loader_spec(self) -> LoaderSpec:
        """Build the LoaderSpec the configured loader variant needs."""
        if self.datasource_type == DataSourceType.CSV:
            return LoaderSpec(
                center_column=self.center_node_column_name,
                center_column_number=self.center_node_column_number,
                information_column_numbers=tuple(self.information_node_column_numbers),
                column_names=dict(self.column_to_name_mapping),
            )
        return LoaderSpec(
            filter_template=self.base_query,
            center_column=self.base_column_name,
            information_columns=tuple(self.children_columns),
        )


# --- Value parsing ---

def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return LIST_DELIMITER.join(str(v) for v in value)
    return "" if value is None else str(value)


def _split(value: str) -> List[str]:
    return [part.strip() for part in value.split(LIST_DELIMITER) if part.strip()]


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigError(f"'{value}' is not a boolean value.")


def parse_column_number(value: str) -> int:
    """Parse a one-based column number into a zero-based index."""
    try:
        number = int(value.strip())
    except ValueError:
        raise ConfigError(f"'{value}' is not a column number.")
    if number < 1:
        raise ConfigError(f"Column numbers start at 1, got {number}.")
    return number - 1


def _optional(value: str) -> Optional[str]:
    stripped = value.strip()
    return stripped or None


def _set_default_max_nodes(settings: Settings, value: str) -> None:
    try:
        max_nodes = int(value.strip())
    except ValueError:
        max_nodes = 0
    if max_nodes < 1:
        logger.warning(
            f"The option default_max_nodes was not a positive integer ('{value}'). "
            f"Using the default value of {settings.default_max_nodes}."
        )
        return
    settings.default_max_nodes = max_nodes


def _set_datasource_type(settings: Settings, value: str) -> None:
    settings.datasource_type = DataSourceType.parse(value)


def _set_column_to_name_mapping(settings: Settings, value: str) -> None:
    settings.column_to_name_mapping = {i: name for i, name in enumerate(_split(value))}


def _set_information_node_column_numbers(settings: Settings, value: str) -> None:
    settings.information_node_column_numbers = [parse_column_number(n) for n in _split(value)]


def _set_center_node_column_number(settings: Settings, value: str) -> None:
    settings.center_node_column_number = parse_column_number(value)


def _set_delimiter(settings: Settings, value: str) -> None:
    if value == "\\t" or value.lower() == "tab":
        value = "\t"
    if len(value) != 1:
        raise ConfigError(f"The delimiter must be a single character, got '{value}'.")
    settings.delimiter = value


Setter = Callable[[Settings, str], None]

OPTION_SETTERS: Dict[str, Setter] = {
    "default_max_nodes": _set_default_max_nodes,
    "use_tool_tip": lambda s, v: setattr(s, "use_tool_tip", parse_bool(v)),
    "datasource_type": _set_datasource_type,
    "first_node_entry": lambda s, v: setattr(s, "first_node_entry", _optional(v)),
    # database
    "database_path": lambda s, v: setattr(s, "database_path", _optional(v)),
    "database_name": lambda s, v: setattr(s, "database_path", _optional(v)),
    "base_query": lambda s, v: setattr(s, "base_query", _optional(v)),
    "base_column_name": lambda s, v: setattr(s, "base_column_name", _optional(v)),
    "children_columns": lambda s, v: setattr(s, "children_columns", _split(v)),
    # csv
    "file_name": lambda s, v: setattr(s, "file_name", _optional(v)),
    "center_node_column_name": lambda s, v: setattr(s, "center_node_column_name", _optional(v)),
    "center_node_column_number": _set_center_node_column_number,
    "column_to_name_mapping": _set_column_to_name_mapping,
    "information_node_column_numbers": _set_information_node_column_numbers,
    "has_header": lambda s, v: setattr(s, "has_header", parse_bool(v)),
    "delimiter": _set_delimiter,
}


def apply_options(settings: Settings, options: Mapping[str, Any]) -> Settings:
    """Apply raw key/value options to settings in place."""
    for key, raw in options.items():
        if raw is None:
            continue
        setter = OPTION_SETTERS.get(str(key).strip().lower())
        if setter is None:
            logger.warning(f"Ignoring unknown option '{key}'")
            continue
        setter(settings, _as_text(raw))
    return settings


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a flat YAML mapping of options."""
    if not path.exists() or not path.is_file():
        raise ConfigError(f"{path} is not a valid configuration file.")
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of option names to values.")
    return data


def load_settings(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """
    Build Settings from a config file plus overrides.

    Without an explicit path, entigraph.yaml in the working directory is used
    when present. Overrides win over file values.
    """
    settings = Settings()

    if config_path is not None:
        apply_options(settings, read_config_file(Path(config_path)))
    elif Path(DEFAULT_CONFIG_FILE).is_file():
        apply_options(settings, read_config_file(Path(DEFAULT_CONFIG_FILE)))

    if overrides:
        apply_options(settings, overrides)

    if settings.datasource_type is None:
        raise ConfigError("The option datasource_type must be set (database or csv).")
    return settings


# Starter files written by `entigraph init`.
DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "database": {
        "datasource_type": "database",
        "default_max_nodes": DEFAULT_MAX_NODES,
        "use_tool_tip": False,
        "database_path": "people.db",
        "base_query": "SELECT * FROM people WHERE",
        "base_column_name": "Name",
        "first_node_entry": "Alice",
        "children_columns": "Title,City",
    },
    "csv": {
        "datasource_type": "csv",
        "default_max_nodes": DEFAULT_MAX_NODES,
        "use_tool_tip": True,
        "file_name": "presidents.csv",
        "has_header": True,
        "center_node_column_name": "President",
        "center_node_column_number": 2,
        "column_to_name_mapping": "Presidency,President,Took office,Left office,Party,Home State",
        "information_node_column_numbers": "1,5,6",
    },
}
