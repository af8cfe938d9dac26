"""Command line interface for parse-comments."""
