"""
Calendar feature: API routes for calendar events.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from supabase import Client

from timetable_api.core.dependencies import get_db
from timetable_api.core.exceptions import BadRequestError
from timetable_api.core.schemas import CreatedResponse
from timetable_api.features.calendar.schemas import (
    CalendarEventCreate,
    CalendarEventResponse,
    CalendarEventUpdate,
)
from timetable_api.features.calendar.service import CalendarService

router = APIRouter()


@router.get(
    "/schedules/{schedule}/calendar_events",
    response_model=list[CalendarEventResponse],
    response_model_exclude_none=True,
)
def list_events(
    schedule: str,
    week: str | None = None,
    in_locations: str | None = Query(None, alias="inLocations"),
    teachers: str | None = None,
    groups: str | None = None,
    db: Client = Depends(get_db),
):
    """Events of a schedule for one week, filtered by location, teacher and/or group."""
    service = CalendarService(db)
    return service.get_events(schedule, week, in_locations, teachers, groups)


@router.post(
    "/calendar_events",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_event(data: CalendarEventCreate, db: Client = Depends(get_db)):
    """Create a new calendar event; `belongsTo` names its schedule."""
    event_id = CalendarService(db).create_event(data)
    return CreatedResponse(id=event_id)


@router.post(
    "/schedules/{schedule}/calendar_events",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_schedule_event(
    schedule: str,
    data: CalendarEventCreate,
    db: Client = Depends(get_db),
):
    """Create a new calendar event in the schedule given by the path."""
    data.belongs_to = schedule
    event_id = CalendarService(db).create_event(data)
    return CreatedResponse(id=event_id)


@router.put("/calendar_events", status_code=status.HTTP_204_NO_CONTENT)
def update_event(
    data: CalendarEventUpdate,
    id: str | None = None,
    db: Client = Depends(get_db),
):
    """Update an existing event, identified by ?id= or by `id` in the body."""
    event_id = id or data.id
    if not event_id:
        raise BadRequestError("Missing event id.")
    CalendarService(db).update_event(event_id, data.model_dump(exclude_unset=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/calendar_events", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(id: str, db: Client = Depends(get_db)):
    """Delete an event."""
    CalendarService(db).delete_event(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
