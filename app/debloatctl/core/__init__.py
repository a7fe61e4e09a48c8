"""Core inventory engine for debloatctl.

Catalog loading, inventory building, filtering, action dispatch and
the session that ties them together.
"""
