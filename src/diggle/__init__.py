"""Diggle - a vertical mining simulation."""

__version__ = "0.1.0"
