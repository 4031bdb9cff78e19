"""Manage chain resources on a backend node from the command line."""

__version__ = "0.1.0"
