"""
Display side of entigraph: the synchronized graph and its visibility.
"""

from .display import DisplayGraph, MergeStats
from .visibility import VisibilityController

__all__ = ["DisplayGraph", "MergeStats", "VisibilityController"]
