"""
Calendar feature: Schemas for request/response models.
"""

from datetime import datetime
from pydantic import Field

from timetable_api.core.schemas import CamelModel, CourseRef, EntityRef

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$"


class CalendarEventCreate(CamelModel):
    """Request to create a calendar event.

    Required-ness of start/end/duration/relations is checked by the service so
    that a missing field is reported with the same message as an invalid one.
    """
    belongs_to: str | None = None  # schedule id; taken from the path on the scoped route
    display_name: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    duration: int | None = None  # minutes
    type: str | None = None  # recognized tags only, see validation.EVENT_TYPES
    course: str | None = None
    locations: list[str] = []
    teachers: list[str] = []
    groups: list[str] = []
    color: str | None = Field(None, pattern=HEX_COLOR)
    cancelled: bool = False


class CalendarEventUpdate(CamelModel):
    """Request to update an existing event. Only fields that are sent are written."""
    id: str | None = None  # alternative to the ?id= query parameter
    display_name: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    duration: int | None = None
    type: str | None = None
    course: str | None = None
    locations: list[str] | None = None
    teachers: list[str] | None = None
    groups: list[str] | None = None
    color: str | None = Field(None, pattern=HEX_COLOR)
    cancelled: bool | None = None


class CalendarEventResponse(CamelModel):
    """An event with its references resolved to displayable shapes."""
    id: str
    belongs_to: EntityRef
    display_name: str | None = None
    start: datetime
    end: datetime
    duration: int
    type: str | None = None
    course: CourseRef | None = None
    in_locations: list[EntityRef] = []
    teachers: list[EntityRef] = []
    groups: list[EntityRef] = []
    created_at: datetime
    updated_at: datetime
    color: str
    cancelled: bool = False
