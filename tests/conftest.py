"""
Test configuration and fixtures
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from gift_service.app import app
from gift_service.clients.base import RecordClient
from gift_service.clients.memory_client import InMemoryRecordClient
from gift_service.dependencies import build_repositories, set_repositories
from gift_service.repositories.friend_repository import FriendRepository
from gift_service.repositories.gift_activity_repository import GiftActivityRepository
from gift_service.repositories.group_gift_repository import GroupGiftRepository
from gift_service.repositories.price_alert_repository import PriceAlertRepository
from gift_service.repositories.saved_gift_repository import SavedGiftRepository
from gift_service.repositories.shared_wishlist_repository import SharedWishlistRepository
from gift_service.services.social_service import SocialGiftService


@pytest.fixture
def memory_client():
    """Fresh in-memory record store."""
    return InMemoryRecordClient()


@pytest.fixture
def mock_client():
    """Record client whose responses each test scripts."""
    return AsyncMock(spec=RecordClient)


@pytest.fixture
def group_gift_repo(memory_client):
    return GroupGiftRepository(memory_client)


@pytest.fixture
def price_alert_repo(memory_client):
    return PriceAlertRepository(memory_client)


@pytest.fixture
def saved_gift_repo(memory_client, price_alert_repo):
    return SavedGiftRepository(memory_client, price_alert_repo)


@pytest.fixture
def social_service(memory_client):
    return SocialGiftService(
        friends=FriendRepository(memory_client),
        wishlists=SharedWishlistRepository(memory_client),
        activities=GiftActivityRepository(memory_client),
    )


@pytest.fixture
def api_client(memory_client):
    """
    Test client over the in-memory store.

    The lifespan is not entered, so no Supabase connection is attempted.
    """
    set_repositories(build_repositories(memory_client))
    yield TestClient(app)
    set_repositories(None)


@pytest.fixture
def sample_group_gift():
    """Sample group gift input"""
    return {
        "title": "Team birthday present",
        "targetAmount": 100,
        "description": "Headphones for Sam",
        "occasionType": "Birthday",
        "createdBy": "alex@example.com",
        "recipientId": 7,
        "giftId": 3,
    }
