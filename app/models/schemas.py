"""API request and response models."""
from datetime import date
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

PackageType = Literal["package", "tour_package"]
BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]


# ---- Chat relay ----

class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1, description="Message text")


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatTurn] = Field(..., min_length=1, description="Conversation so far, most recent last")
    user_location: Optional[str] = Field(None, alias="userLocation", description="Free-text location hint")

    @field_validator("user_location")
    @classmethod
    def _blank_location_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ChatReply(BaseModel):
    """Outcome of one relay call. succeeded=False means the text came from the fallback table."""

    text: str
    succeeded: bool
    error: Optional[str] = None
    details: Optional[str] = None

    def to_payload(self) -> dict:
        if self.succeeded:
            return {"response": self.text, "success": True}
        payload = {"error": self.error or "Unknown error", "response": self.text}
        if self.details:
            payload["details"] = self.details
        return payload


# ---- Travel store ----

class PackageRef(BaseModel):
    package_id: UUID
    package_type: PackageType = "package"

    @property
    def column(self) -> str:
        """Foreign-key column on bookings/reviews/favorites that holds this reference."""
        return "package_id" if self.package_type == "package" else "tour_package_id"

    @property
    def table(self) -> str:
        return "packages" if self.package_type == "package" else "tour_packages"


class BookingCreate(PackageRef):
    booking_date: date
    number_of_people: int = Field(1, ge=1, le=20)
    contact_phone: str = Field(..., min_length=1)
    contact_email: str = Field(..., min_length=3)
    special_requests: Optional[str] = None

    @field_validator("booking_date")
    @classmethod
    def _not_in_past(cls, v: date) -> date:
        if v < date.today():
            raise ValueError("booking_date cannot be in the past")
        return v

    @field_validator("contact_email")
    @classmethod
    def _looks_like_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("contact_email must be an email address")
        return v

    @field_validator("special_requests")
    @classmethod
    def _empty_requests_is_none(cls, v: Optional[str]) -> Optional[str]:
        return (v or "").strip() or None


class ReviewCreate(PackageRef):
    rating: int = Field(5, ge=1, le=5)
    title: str = Field(..., min_length=1)
    comment: str = Field(..., min_length=1)
    booking_id: Optional[UUID] = None


class ReviewList(BaseModel):
    reviews: list[dict]
    average_rating: float
    count: int


class FavoriteStatus(BaseModel):
    is_favorite: bool


class ChatLogCreate(BaseModel):
    question: str = Field(..., min_length=1)
    response: str = Field(..., min_length=1)
