"""debloatctl - Package inventory and debloating for Android devices."""

__version__ = "0.1.0"
