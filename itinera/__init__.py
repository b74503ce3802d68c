"""Itinera: streaming itinerary JSON → HTML renderer."""

__version__ = "0.1.0"
