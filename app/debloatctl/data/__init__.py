"""Bundled data files (default theme and classification catalog)."""
