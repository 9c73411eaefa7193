"""
FastAPI dependency injection functions.
"""

from supabase import Client

from timetable_api.core.database import get_supabase_client


def get_db() -> Client:
    """Dependency: get Supabase client."""
    return get_supabase_client()
