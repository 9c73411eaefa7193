"""
Schedules feature: Schemas for request/response models.
"""

from timetable_api.core.schemas import CamelModel, CourseRef, EntityRef


class ScheduleCreate(CamelModel):
    """Request to create a new schedule."""
    display_name: str
    start: str | None = None  # free-form term bounds, e.g. "2024-09-01"
    end: str | None = None


class ScheduleUpdate(CamelModel):
    """Request to update an existing schedule."""
    display_name: str | None = None
    start: str | None = None
    end: str | None = None


class ScheduleDetail(CamelModel):
    """Schedule with its membership lists resolved."""
    id: str
    display_name: str
    start: str | None = None
    end: str | None = None
    teachers: list[EntityRef] = []
    groups: list[EntityRef] = []
    locations: list[EntityRef] = []
    courses: list[CourseRef] = []
