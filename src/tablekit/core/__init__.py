"""Core data loading and settings for tablekit."""
