"""Version information for tablekit."""

__version__ = "0.1.0"
