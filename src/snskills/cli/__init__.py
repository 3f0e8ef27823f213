"""Command-line interface for snskills."""
