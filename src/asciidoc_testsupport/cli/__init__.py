"""Command-line interface for fixture maintenance."""
