"""Command line entry point for querying sensor objects over D-Bus."""
