"""
API Routers Package
Exposes all route modules for the Vectmo service
"""

from . import vectmo_router

__all__ = [
    "vectmo_router",
]
