"""
Core data model: tree nodes, display handles, errors and results.
"""

from .errors import BackingStoreError, ConfigError, EntiGraphError, SetupError
from .result import Err, Ok, Result
from .tree import EntityTree
from .types import (
    ClickAction,
    ClickOutcome,
    DataSourceType,
    DisplayEdge,
    DisplayNode,
    LoaderSpec,
    TreeNode,
)

__all__ = [
    "BackingStoreError",
    "ClickAction",
    "ClickOutcome",
    "ConfigError",
    "DataSourceType",
    "DisplayEdge",
    "DisplayNode",
    "EntiGraphError",
    "EntityTree",
    "Err",
    "LoaderSpec",
    "Ok",
    "Result",
    "SetupError",
    "TreeNode",
]
