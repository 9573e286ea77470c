# remainder_service/routers/__init__.py
"""API routers package."""

from remainder_service.routers import remainders

__all__ = ["remainders"]
