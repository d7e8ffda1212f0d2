"""Command-line interface for lazy-resources."""
