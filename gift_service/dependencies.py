"""
Shared dependencies for the application.

Builds the record client and repositories, and provides the dependency
injection functions used across routers.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from .clients.base import RecordClient
from .clients.memory_client import InMemoryRecordClient
from .clients.supabase_client import create_supabase_record_client
from .config import Settings
from .repositories.friend_repository import FriendRepository
from .repositories.gift_activity_repository import GiftActivityRepository
from .repositories.group_gift_repository import GroupGiftRepository
from .repositories.price_alert_repository import PriceAlertRepository
from .repositories.saved_gift_repository import SavedGiftRepository
from .repositories.shared_wishlist_repository import SharedWishlistRepository
from .services.social_service import SocialGiftService

logger = structlog.get_logger(__name__)


@dataclass
class Repositories:
    """All repositories sharing one record client."""

    client: RecordClient
    group_gifts: GroupGiftRepository
    price_alerts: PriceAlertRepository
    saved_gifts: SavedGiftRepository
    social: SocialGiftService


def build_repositories(client: RecordClient) -> Repositories:
    """
    Wire every repository to the given client.

    Args:
        client: Record store client

    Returns:
        Repository container
    """
    price_alerts = PriceAlertRepository(client)
    return Repositories(
        client=client,
        group_gifts=GroupGiftRepository(client),
        price_alerts=price_alerts,
        saved_gifts=SavedGiftRepository(client, price_alerts),
        social=SocialGiftService(
            friends=FriendRepository(client),
            wishlists=SharedWishlistRepository(client),
            activities=GiftActivityRepository(client),
        ),
    )


async def create_record_client(settings: Settings) -> RecordClient:
    """
    Create the record client selected by ``RECORD_BACKEND``.

    Raises:
        ConfigurationException: If Supabase is selected without credentials
    """
    if settings.RECORD_BACKEND == "memory":
        logger.warning("Using in-memory record store; data is not persisted")
        return InMemoryRecordClient()
    return await create_supabase_record_client(settings)


# Global repository container (set by main app)
_repositories: Optional[Repositories] = None


def set_repositories(repositories: Optional[Repositories]) -> None:
    """
    Set the global repository container.

    Called by main app during startup and shutdown.
    """
    global _repositories
    _repositories = repositories


async def get_repositories() -> Repositories:
    """Get the repository container for dependency injection."""
    if _repositories is None:
        raise RuntimeError("Repositories not initialized")
    return _repositories


async def get_group_gift_repository() -> GroupGiftRepository:
    return (await get_repositories()).group_gifts


async def get_price_alert_repository() -> PriceAlertRepository:
    return (await get_repositories()).price_alerts


async def get_saved_gift_repository() -> SavedGiftRepository:
    return (await get_repositories()).saved_gifts


async def get_social_service() -> SocialGiftService:
    return (await get_repositories()).social
