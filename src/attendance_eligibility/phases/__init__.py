"""The thirteen phase checks and their registry."""
