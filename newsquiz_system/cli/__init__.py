"""Command-line interface for the newsquiz system."""
