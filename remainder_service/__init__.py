# remainder_service/__init__.py
"""Remainder Service: a REST API for storing dated reminders."""

__version__ = "1.0.0"
