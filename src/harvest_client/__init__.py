"""Harvest client - typed bindings for the Harvest time tracking and invoicing API."""

__version__ = "0.1.0"
