# remainder_service/core/__init__.py
"""Configuration, field rules and error handling."""
