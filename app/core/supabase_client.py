"""Supabase client and current-user lookup. Requires SUPABASE_URL and SUPABASE_ANON_KEY (the anon key, so RLS policies apply)."""
import logging
from dataclasses import dataclass
from typing import Optional

from app.core.config import get_settings

logger = logging.getLogger(__name__)

_supabase = None


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: Optional[str]
    access_token: str


def get_supabase_client():
    """Return the shared anonymous Supabase client or None if disabled. Use for public reads (catalog, reviews)."""
    return _get_client()


def _get_client():
    global _supabase
    if _supabase is not None:
        return _supabase
    settings = get_settings()
    if not settings.supabase_enabled:
        logger.info(
            "Supabase disabled: SUPABASE_URL and/or SUPABASE_ANON_KEY not set or empty. "
            "Bookings, reviews and favorites will not be available."
        )
        return None
    try:
        from supabase import create_client
        _supabase = create_client(settings.supabase_url, settings.supabase_key)
        logger.info("Supabase client connected.")
        return _supabase
    except Exception as e:
        logger.warning("Supabase client failed to connect: %s", e)
        return None


def get_user_client(access_token: str):
    """New client whose PostgREST calls carry the user's JWT, so row-level security sees auth.uid()."""
    settings = get_settings()
    if not settings.supabase_enabled:
        return None
    try:
        from supabase import create_client
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.postgrest.auth(access_token)
        return client
    except Exception as e:
        logger.warning("Supabase user client failed to connect: %s", e)
        return None


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_user(access_token: str) -> Optional[CurrentUser]:
    """Resolve a Supabase access token to the signed-in user. None when the token is invalid or Supabase is off."""
    client = _get_client()
    if not client or not access_token:
        return None
    try:
        r = client.auth.get_user(access_token)
    except Exception as e:
        logger.info("Supabase get_user rejected token: %s", e)
        return None
    user = getattr(r, "user", None)
    if user is None or not getattr(user, "id", None):
        return None
    return CurrentUser(id=str(user.id), email=getattr(user, "email", None), access_token=access_token)
