"""
entigraph: incremental entity-relationship graph explorer.

Start from one center entity and drill in: expand entities into their
attributes, pivot from an attribute to the entities sharing it, and collapse
what you no longer need. Data is pulled from the backing store only as the
graph grows.
"""

__version__ = "0.3.0"
