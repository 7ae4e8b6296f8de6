"""Command-line interface for vibelogger."""
