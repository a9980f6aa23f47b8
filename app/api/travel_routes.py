"""FastAPI routes for the catalog, bookings, reviews, favorites and chat logs."""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from app.core import supabase_client, travel_store
from app.core.supabase_client import CurrentUser
from app.models.schemas import (
    BookingCreate,
    BookingStatus,
    ChatLogCreate,
    FavoriteStatus,
    PackageRef,
    PackageType,
    ReviewCreate,
    ReviewList,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["travel"])


# ---- Dependencies ----

def get_public_db():
    client = supabase_client.get_supabase_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database is not configured")
    return client


def require_user(authorization: Optional[str] = Header(None)) -> CurrentUser:
    token = supabase_client.parse_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Please log in to continue")
    user = supabase_client.get_user(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Session expired or invalid; please log in again")
    return user


def get_user_db(user: CurrentUser = Depends(require_user)):
    client = supabase_client.get_user_client(user.access_token)
    if client is None:
        raise HTTPException(status_code=503, detail="Database is not configured")
    return client


# ---- Catalog (public) ----

@router.get("/destinations")
def destinations(
    category: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    db=Depends(get_public_db),
) -> list[dict]:
    return travel_store.list_destinations(db, category=category, featured=featured)


@router.get("/packages")
def packages(package_type: PackageType = Query("package", alias="type"), db=Depends(get_public_db)) -> list[dict]:
    return travel_store.list_packages(db, package_type)


@router.get("/packages/{package_type}/{package_id}")
def package_detail(package_type: PackageType, package_id: UUID, db=Depends(get_public_db)) -> dict:
    return travel_store.get_package(db, PackageRef(package_id=package_id, package_type=package_type))


@router.get("/packages/{package_type}/{package_id}/reviews", response_model=ReviewList)
def package_reviews(package_type: PackageType, package_id: UUID, db=Depends(get_public_db)) -> dict:
    return travel_store.list_reviews(db, PackageRef(package_id=package_id, package_type=package_type))


# ---- Reviews ----

@router.post("/reviews", status_code=201)
def create_review(
    review: ReviewCreate,
    user: CurrentUser = Depends(require_user),
    db=Depends(get_user_db),
) -> dict:
    return travel_store.create_review(db, user.id, review)


# ---- Bookings ----

@router.get("/bookings")
def bookings(
    status: Optional[BookingStatus] = Query(None),
    user: CurrentUser = Depends(require_user),
    db=Depends(get_user_db),
) -> list[dict]:
    return travel_store.list_bookings(db, user.id, status=status)


@router.post("/bookings", status_code=201)
def create_booking(
    booking: BookingCreate,
    user: CurrentUser = Depends(require_user),
    db=Depends(get_user_db),
) -> dict:
    return travel_store.create_booking(db, user.id, booking)


@router.post("/bookings/{booking_id}/cancel")
def cancel_booking(
    booking_id: UUID,
    user: CurrentUser = Depends(require_user),
    db=Depends(get_user_db),
) -> dict:
    return travel_store.cancel_booking(db, user.id, str(booking_id))


# ---- Favorites ----

@router.get("/favorites/{package_type}/{package_id}", response_model=FavoriteStatus)
def favorite_status(
    package_type: PackageType,
    package_id: UUID,
    user: CurrentUser = Depends(require_user),
    db=Depends(get_user_db),
) -> FavoriteStatus:
    ref = PackageRef(package_id=package_id, package_type=package_type)
    return FavoriteStatus(is_favorite=travel_store.is_favorite(db, user.id, ref))


@router.post("/favorites/toggle", response_model=FavoriteStatus)
def toggle_favorite(
    ref: PackageRef,
    user: CurrentUser = Depends(require_user),
    db=Depends(get_user_db),
) -> FavoriteStatus:
    return FavoriteStatus(is_favorite=travel_store.toggle_favorite(db, user.id, ref))


# ---- Chat logs ----

@router.post("/chat-logs", status_code=204)
def save_chat_log(
    log: ChatLogCreate,
    user: CurrentUser = Depends(require_user),
    db=Depends(get_user_db),
) -> None:
    travel_store.save_chat_log(db, user.id, log.question, log.response)
