"""CLI commands for entigraph."""
