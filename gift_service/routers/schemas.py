"""Request and response models shared by the API routers."""

from typing import Optional

from pydantic import BaseModel, Field

from ..domain.entities import ViewModel


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    message: str
    details: dict = {}


class NoteRequest(ViewModel):
    """Body for replacing the note on a saved gift."""

    note: str = Field(default="", max_length=2000)


class PrivacyRequest(ViewModel):
    """Body for changing wishlist visibility."""

    is_public: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str
    backend: Optional[str] = None
