"""
Database connections: Supabase client setup and persistence error wrapping.
"""

import logging
from contextlib import contextmanager
from functools import lru_cache
from uuid import UUID

from supabase import create_client, Client

from timetable_api.config import get_settings
from timetable_api.core.exceptions import AppBaseError, ServerError

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Client:
    """Get the Supabase client (singleton).

    Uses the service_role key when configured (no RLS policies are defined
    for timetable tables), otherwise the anon key.
    """
    settings = get_settings()
    key = settings.SUPABASE_SERVICE_KEY or settings.SUPABASE_KEY
    return create_client(settings.SUPABASE_URL, key)


@contextmanager
def store_errors(action: str):
    """Re-raise any persistence failure inside the block as a ServerError.

    The original exception is logged, never exposed to the caller.
    Application errors raised inside the block pass through untouched.
    """
    try:
        yield
    except AppBaseError:
        raise
    except Exception as e:
        logger.error(f"❌ Store call failed ({action}): {e}")
        raise ServerError() from e


def is_valid_id(value: str | None) -> bool:
    """Record ids are UUIDs; anything else cannot match a stored row."""
    if not value:
        return False
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True
