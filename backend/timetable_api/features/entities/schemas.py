"""
Entities feature: Schemas for request/response models.
"""

from timetable_api.core.schemas import CamelModel


class EntityCreate(CamelModel):
    """Request to create a teacher, group or location."""
    category: str  # teacher | group | location
    display_name: str
    schedule: str | None = None  # link into this schedule's roster


class EntityUpdate(CamelModel):
    """Request to update an existing teacher, group or location."""
    display_name: str | None = None
