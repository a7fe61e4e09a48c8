"""Utility modules for debloatctl."""
