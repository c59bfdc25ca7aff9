"""Command-line interface for the Stackr API."""
