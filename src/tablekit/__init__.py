"""tablekit - terminal table rendering and CLI output helpers."""

from tablekit.__version__ import __version__

__all__ = ["__version__"]
