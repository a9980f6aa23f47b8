"""
Bookings, reviews, favorites, chat logs and catalog reads over Supabase tables.

Every function takes the Supabase client to use: the caller's JWT-scoped client for
user data (RLS checks auth.uid() = user_id), the anonymous client for public reads.
"""
import logging
import math
from datetime import datetime, timezone
from typing import Optional

from app.models.schemas import BookingCreate, PackageRef, ReviewCreate

logger = logging.getLogger(__name__)

BOOKINGS_TABLE = "bookings"
REVIEWS_TABLE = "reviews"
FAVORITES_TABLE = "favorites"
CHAT_LOGS_TABLE = "chat_logs"
DESTINATIONS_TABLE = "destinations"
PACKAGE_IMAGES_TABLE = "package_images"

BOOKING_SELECT = "*, packages (title, duration, image_url), tour_packages (title, duration, images)"
REVIEW_SELECT = "id, rating, title, comment, helpful_count, created_at, profiles:user_id (full_name)"


class StoreError(Exception):
    status_code = 502

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    status_code = 404


class ConflictError(StoreError):
    status_code = 409


def _execute(query, action: str):
    try:
        return query.execute()
    except Exception as e:
        logger.warning("Supabase %s failed: %s", action, e)
        raise StoreError(f"Failed to {action}") from e


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---- Catalog ----

def list_destinations(client, category: Optional[str] = None, featured: Optional[bool] = None) -> list[dict]:
    query = client.table(DESTINATIONS_TABLE).select("*")
    if category:
        query = query.eq("category", category)
    if featured is not None:
        query = query.eq("featured", featured)
    return _execute(query.order("name"), "load destinations").data or []


def list_packages(client, package_type: str = "package") -> list[dict]:
    table = "packages" if package_type == "package" else "tour_packages"
    return _execute(client.table(table).select("*").order("created_at", desc=True), "load packages").data or []


def get_package(client, ref: PackageRef) -> dict:
    """Package row with its images (primary first as ordered by display_order)."""
    r = _execute(client.table(ref.table).select("*").eq("id", str(ref.package_id)).limit(1), "load package")
    if not r.data:
        raise NotFoundError("Package not found")
    package = dict(r.data[0])
    images = _execute(
        client.table(PACKAGE_IMAGES_TABLE).select("*").eq(ref.column, str(ref.package_id)).order("display_order"),
        "load package images",
    )
    package["package_images"] = images.data or []
    return package


def get_package_price(client, ref: PackageRef) -> float:
    r = _execute(client.table(ref.table).select("id, price").eq("id", str(ref.package_id)).limit(1), "load package")
    if not r.data:
        raise NotFoundError("Package not found")
    price = r.data[0].get("price")
    if price is None:
        raise StoreError("Package has no price")
    return float(price)


# ---- Bookings ----

def create_booking(client, user_id: str, booking: BookingCreate) -> dict:
    """Insert a pending booking; total_amount is price per person times party size."""
    price = get_package_price(client, booking)
    row = {
        "user_id": user_id,
        booking.column: str(booking.package_id),
        "booking_date": booking.booking_date.isoformat(),
        "number_of_people": booking.number_of_people,
        "total_amount": round(price * booking.number_of_people, 2),
        "contact_phone": booking.contact_phone,
        "contact_email": booking.contact_email,
        "special_requests": booking.special_requests,
        "status": "pending",
    }
    r = _execute(client.table(BOOKINGS_TABLE).insert(row), "create booking")
    logger.info("Booking created for user %s (%s %s)", user_id, booking.package_type, booking.package_id)
    return r.data[0] if r.data else row


def list_bookings(client, user_id: str, status: Optional[str] = None) -> list[dict]:
    query = client.table(BOOKINGS_TABLE).select(BOOKING_SELECT).eq("user_id", user_id)
    if status:
        query = query.eq("status", status)
    return _execute(query.order("created_at", desc=True), "load bookings").data or []


def cancel_booking(client, user_id: str, booking_id: str) -> dict:
    """Only pending bookings can be cancelled."""
    r = _execute(
        client.table(BOOKINGS_TABLE).select("id, status").eq("id", booking_id).eq("user_id", user_id).limit(1),
        "load booking",
    )
    if not r.data:
        raise NotFoundError("Booking not found")
    status = r.data[0].get("status")
    if status != "pending":
        raise ConflictError(f"Only pending bookings can be cancelled (status is {status})")
    updated = _execute(
        client.table(BOOKINGS_TABLE)
        .update({"status": "cancelled", "updated_at": _now()})
        .eq("id", booking_id)
        .eq("user_id", user_id),
        "cancel booking",
    )
    logger.info("Booking %s cancelled by user %s", booking_id, user_id)
    return updated.data[0] if updated.data else {"id": booking_id, "status": "cancelled"}


# ---- Reviews ----

def average_rating(reviews: list[dict]) -> float:
    """Mean rating rounded half-up to one decimal; 0 when there are no reviews."""
    if not reviews:
        return 0.0
    avg = sum(r.get("rating", 0) for r in reviews) / len(reviews)
    return math.floor(avg * 10 + 0.5) / 10


def create_review(client, user_id: str, review: ReviewCreate) -> dict:
    row = {
        "user_id": user_id,
        review.column: str(review.package_id),
        "rating": review.rating,
        "title": review.title,
        "comment": review.comment,
    }
    if review.booking_id is not None:
        row["booking_id"] = str(review.booking_id)
    r = _execute(client.table(REVIEWS_TABLE).insert(row), "create review")
    return r.data[0] if r.data else row


def list_reviews(client, ref: PackageRef) -> dict:
    r = _execute(
        client.table(REVIEWS_TABLE)
        .select(REVIEW_SELECT)
        .eq(ref.column, str(ref.package_id))
        .order("created_at", desc=True),
        "load reviews",
    )
    reviews = r.data or []
    return {"reviews": reviews, "average_rating": average_rating(reviews), "count": len(reviews)}


# ---- Favorites ----

def is_favorite(client, user_id: str, ref: PackageRef) -> bool:
    r = _execute(
        client.table(FAVORITES_TABLE).select("id").eq("user_id", user_id).eq(ref.column, str(ref.package_id)).limit(1),
        "check favorite",
    )
    return bool(r.data)


def add_favorite(client, user_id: str, ref: PackageRef) -> None:
    _execute(
        client.table(FAVORITES_TABLE).insert({"user_id": user_id, ref.column: str(ref.package_id)}),
        "add favorite",
    )


def remove_favorite(client, user_id: str, ref: PackageRef) -> None:
    _execute(
        client.table(FAVORITES_TABLE).delete().eq("user_id", user_id).eq(ref.column, str(ref.package_id)),
        "remove favorite",
    )


def toggle_favorite(client, user_id: str, ref: PackageRef) -> bool:
    """Flip the favorite state and return the new one."""
    if is_favorite(client, user_id, ref):
        remove_favorite(client, user_id, ref)
        return False
    add_favorite(client, user_id, ref)
    return True


# ---- Chat logs ----

def save_chat_log(client, user_id: str, question: str, response: str) -> None:
    _execute(
        client.table(CHAT_LOGS_TABLE).insert({"user_id": user_id, "question": question, "response": response}),
        "save chat log",
    )
