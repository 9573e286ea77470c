# remainder_service/services/__init__.py
"""Helpers used by the request handlers."""
