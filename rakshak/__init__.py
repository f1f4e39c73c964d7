"""Rakshak portal backend: citizen services API."""

__version__ = "0.1.0"
