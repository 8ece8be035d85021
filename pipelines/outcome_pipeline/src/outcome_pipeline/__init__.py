"""Command-line tools over argument-map snapshots."""

__version__ = "0.1.0"
