"""
Courses feature: Schemas for request/response models.
"""

from timetable_api.core.schemas import CamelModel


class CourseCreate(CamelModel):
    """Request to create a course, standalone or inside a schedule."""
    display_name: str
    subject: str
    schedule: str | None = None


class CourseUpdate(CamelModel):
    """Request to update an existing course."""
    display_name: str | None = None
    subject: str | None = None
