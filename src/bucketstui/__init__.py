"""Buckets TUI - manage retention-governed S3 buckets from the terminal."""

__version__ = "0.1.0"
