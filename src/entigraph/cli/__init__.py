"""Command line interface for entigraph."""
