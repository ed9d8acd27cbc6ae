"""Command-line interface for the Harvest client."""
