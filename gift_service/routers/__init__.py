"""
API routers for gift service endpoints.
"""

from . import group_gifts_router, price_alerts_router, saved_gifts_router, social_router

__all__ = [
    "group_gifts_router",
    "price_alerts_router",
    "saved_gifts_router",
    "social_router",
]
