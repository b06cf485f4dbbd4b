"""
Domain view models for gift data.

View models are what repositories hand back to callers. Attributes are
snake_case in Python and serialize with camelCase keys (``recipientId``,
``Id``) so UI code receives the shape it already consumes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def reject_null(value: Any) -> Any:
    """Reject an explicit null."""
    if value is None:
        raise ValueError("may be omitted but not set to null")
    return value


# Update field that may be left out but not cleared
NonNullTimestamp = Annotated[Optional[datetime], AfterValidator(reject_null)]


class ViewModel(BaseModel):
    """Base for all camelCase-serialized models."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GroupGiftStatus(str, Enum):
    """Lifecycle states of a group gift."""

    ACTIVE = "active"
    COMPLETED = "completed"


class FriendStatus(str, Enum):
    """Friend connection states."""

    PENDING = "pending"
    CONNECTED = "connected"


# ---------------------------------------------------------------------------
# Group gifts
# ---------------------------------------------------------------------------


class Contributor(ViewModel):
    """A person who contributed to a group gift."""

    name: str = ""
    email: str = ""
    amount: float = 0
    contributed_at: datetime = Field(default_factory=utc_now)


class GroupGift(ViewModel):
    """Group gift collecting contributions toward a target amount."""

    id: int = Field(alias="Id")
    title: str = ""
    recipient_id: Optional[int] = None
    gift_id: Optional[int] = None
    occasion_type: str = "General"
    target_amount: float = 0
    current_amount: float = 0
    created_by: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    deadline: datetime = Field(default_factory=utc_now)
    status: str = GroupGiftStatus.ACTIVE.value
    description: str = ""
    contributors: List[Contributor] = Field(default_factory=list)
    invited_contributors: List[str] = Field(default_factory=list)


class GroupGiftCreate(ViewModel):
    """Request model for creating a group gift."""

    title: str = ""
    target_amount: float = Field(default=0, ge=0)
    deadline: Optional[datetime] = None
    description: str = ""
    occasion_type: str = "General"
    created_by: str = ""
    recipient_id: Optional[int] = None
    gift_id: Optional[int] = None


class GroupGiftUpdate(ViewModel):
    """Request model for updating a group gift. Only set fields are sent."""

    title: Optional[str] = None
    target_amount: Optional[float] = Field(default=None, ge=0)
    current_amount: Optional[float] = Field(default=None, ge=0)
    deadline: NonNullTimestamp = None
    description: Optional[str] = None
    occasion_type: Optional[str] = None
    status: Optional[str] = None



class ContributionCreate(ViewModel):
    """Request model for contributing to a group gift."""

    name: str
    email: str
    amount: float = Field(..., gt=0)
    message: str = ""


class Contribution(ViewModel):
    """A contribution applied to a group gift."""

    group_gift_id: int
    name: str
    email: str
    amount: float
    contributed_at: datetime = Field(default_factory=utc_now)
    message: str = ""


class GroupGiftStats(ViewModel):
    """Aggregate figures over all group gifts."""

    total_group_gifts: int = 0
    active_group_gifts: int = 0
    completed_group_gifts: int = 0
    total_amount: float = 0
    average_contribution: float = 0
    total_contributors: int = 0


# ---------------------------------------------------------------------------
# Price alerts
# ---------------------------------------------------------------------------


class PriceAlert(ViewModel):
    """Price watch configured for a gift."""

    id: int = Field(alias="Id")
    gift_id: Optional[int] = None
    recipient_id: Optional[int] = None
    enabled: bool = False
    price_drop_threshold: float = 0
    absolute_threshold: float = 0
    stock_alerts: bool = False
    email_enabled: bool = False
    push_enabled: bool = False
    frequency: str = "immediate"
    created_at: datetime = Field(default_factory=utc_now)
    last_triggered: Optional[datetime] = None
    total_savings: float = 0
    gift: Optional[Dict[str, Any]] = None
    recipient: Optional[Dict[str, Any]] = None


class PriceAlertCreate(ViewModel):
    """Request model for creating a price alert."""

    name: Optional[str] = None
    gift_title: Optional[str] = None
    gift_id: Optional[int] = None
    recipient_id: Optional[int] = None
    enabled: bool = True
    price_drop_threshold: float = Field(default=0, ge=0)
    absolute_threshold: float = Field(default=0, ge=0)
    stock_alerts: bool = True
    email_enabled: bool = True
    push_enabled: bool = True
    frequency: str = "immediate"


class PriceAlertUpdate(ViewModel):
    """Request model for updating a price alert. Only set fields are sent."""

    name: Optional[str] = None
    enabled: Optional[bool] = None
    price_drop_threshold: Optional[float] = Field(default=None, ge=0)
    absolute_threshold: Optional[float] = Field(default=None, ge=0)
    stock_alerts: Optional[bool] = None
    email_enabled: Optional[bool] = None
    push_enabled: Optional[bool] = None
    frequency: Optional[str] = None
    last_triggered: Optional[datetime] = None
    total_savings: Optional[float] = None


# ---------------------------------------------------------------------------
# Saved gifts
# ---------------------------------------------------------------------------


class SavedGift(ViewModel):
    """Gift bookmarked for a recipient."""

    id: int = Field(alias="Id")
    gift_id: Optional[int] = None
    recipient_id: Optional[int] = None
    saved_date: datetime = Field(default_factory=utc_now)
    price_alert: bool = False
    notes: str = ""
    gift: Optional[Dict[str, Any]] = None
    recipient: Optional[Dict[str, Any]] = None


class SavedGiftCreate(ViewModel):
    """Request model for saving a gift."""

    gift_title: Optional[str] = None
    gift_id: Optional[int] = None
    recipient_id: Optional[int] = None
    price_alert: bool = False
    notes: str = ""


class SavedGiftUpdate(ViewModel):
    """Request model for updating a saved gift. Only set fields are sent."""

    name: Optional[str] = None
    saved_date: NonNullTimestamp = None
    price_alert: Optional[bool] = None
    notes: Optional[str] = None



# ---------------------------------------------------------------------------
# Social graph
# ---------------------------------------------------------------------------


class Friend(ViewModel):
    """A connection in the user's friend graph."""

    id: int = Field(alias="Id")
    name: str = ""
    email: str = ""
    photo_url: str = ""
    status: str = FriendStatus.PENDING.value
    mutual_friends: int = 0
    joined_at: datetime = Field(default_factory=utc_now)
    last_active: datetime = Field(default_factory=utc_now)


class FriendCreate(ViewModel):
    """Request model for adding a friend."""

    email: str = Field(..., min_length=3)
    name: Optional[str] = None
    photo_url: str = ""


class FriendUpdate(ViewModel):
    """Request model for updating a friend. Only set fields are sent."""

    name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None
    status: Optional[str] = None
    mutual_friends: Optional[int] = Field(default=None, ge=0)
    last_active: NonNullTimestamp = None



class Collaborator(ViewModel):
    """Person with access to a shared wishlist."""

    name: str = ""
    email: str = ""
    role: str = "owner"


class SharedWishlist(ViewModel):
    """Wishlist shared with friends."""

    id: int = Field(alias="Id")
    title: str = ""
    description: str = ""
    is_public: bool = False
    allow_contributions: bool = False
    created_by: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    collaborators: List[Collaborator] = Field(default_factory=list)
    items: List[Dict[str, Any]] = Field(default_factory=list)


class SharedWishlistCreate(ViewModel):
    """Request model for creating a shared wishlist."""

    title: str = ""
    description: str = ""
    is_public: bool = False
    allow_contributions: bool = True
    created_by: str = ""


class SharedWishlistUpdate(ViewModel):
    """Request model for updating a shared wishlist. Only set fields are sent."""

    title: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    allow_contributions: Optional[bool] = None


class GiftActivity(ViewModel):
    """Entry in the social activity feed."""

    id: int = Field(alias="Id")
    type: str = "shared"
    friend_id: Optional[int] = None
    friend_name: str = ""
    friend_photo_url: str = ""
    gift_id: Optional[int] = None
    gift_title: str = ""
    recipient_id: Optional[int] = None
    recipient_name: str = ""
    timestamp: datetime = Field(default_factory=utc_now)
    privacy: str = "public"
    notes: str = ""
    can_view: bool = True
    occasion: str = ""
    price: Optional[float] = None
    reactions: List[Dict[str, Any]] = Field(default_factory=list)


class GiftActivityCreate(ViewModel):
    """Request model for recording a gift activity."""

    type: str = "shared"
    friend_id: Optional[int] = None
    friend_name: str = ""
    friend_photo_url: str = ""
    gift_id: Optional[int] = None
    gift_title: str = ""
    recipient_id: Optional[int] = None
    recipient_name: str = ""
    occasion: str = ""
    price: Optional[float] = None
    privacy: str = "public"
    notes: str = ""
    can_view: bool = True


class ShareGiftRequest(ViewModel):
    """Request model for sharing a gift with several friends."""

    gift_id: int
    friend_ids: List[int] = Field(..., min_length=1)
    message: str = ""


class SocialStats(ViewModel):
    """Aggregate figures over the social graph."""

    total_friends: int = 0
    connected_friends: int = 0
    total_wishlists: int = 0
    public_wishlists: int = 0
    recent_activities: int = 0
