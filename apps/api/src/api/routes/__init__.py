"""
API Routes Package

Exports all route modules.
"""

from src.api.routes.contours import router as contours_router

__all__ = [
    "contours_router",
]
