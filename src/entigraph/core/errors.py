"""
Exception hierarchy for entigraph.

SetupError covers everything a loader can reject; BackingStoreError is a
SetupError so callers handling one handle both the same way.
"""


class EntiGraphError(Exception):
    """Base class for all entigraph errors."""


class SetupError(EntiGraphError):
    """
    The loader cannot answer with the configuration and data it has.

    Raised for a missing filter template or columns, a query without a
    matching row, or a null value where a label must be shown.
    """


class BackingStoreError(SetupError):
    """The row source could not be read (unreachable store, malformed file)."""


class ConfigError(EntiGraphError):
    """A configuration value could not be parsed."""
