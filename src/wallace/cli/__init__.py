"""Command-line interface for wallace."""
