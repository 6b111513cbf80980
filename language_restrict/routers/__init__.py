"""
API Routers.

All routers are imported here for easy access.
"""

from language_restrict.routers.selection import router as selection_router

__all__ = [
    "selection_router",
]
