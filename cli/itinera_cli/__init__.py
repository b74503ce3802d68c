"""Itinera CLI."""

from itinera import __version__

__all__ = ["__version__"]
