"""
Schedules feature: API routes for schedule management.
"""

from fastapi import APIRouter, Depends, Response, status
from supabase import Client

from timetable_api.core.dependencies import get_db
from timetable_api.core.schemas import CreatedResponse, EntityRef
from timetable_api.features.schedules.schemas import ScheduleCreate, ScheduleDetail, ScheduleUpdate
from timetable_api.features.schedules.service import ScheduleService

router = APIRouter()


@router.get("", response_model=list[EntityRef])
def list_schedules(db: Client = Depends(get_db)):
    """List all schedules (id and name only)."""
    return ScheduleService(db).list_schedules()


@router.get("/{schedule_id}", response_model=ScheduleDetail, response_model_exclude_none=True)
def get_schedule(schedule_id: str, db: Client = Depends(get_db)):
    """Get a schedule with its teachers, groups, locations and courses."""
    return ScheduleService(db).get_schedule(schedule_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_schedule(data: ScheduleCreate, db: Client = Depends(get_db)):
    """Create a new schedule."""
    schedule_id = ScheduleService(db).create_schedule(
        display_name=data.display_name,
        start=data.start,
        end=data.end,
    )
    return CreatedResponse(id=schedule_id)


@router.put("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_schedule(schedule_id: str, data: ScheduleUpdate, db: Client = Depends(get_db)):
    """Rename a schedule or change its term bounds."""
    ScheduleService(db).update_schedule(schedule_id, data.model_dump(exclude_unset=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule(schedule_id: str, db: Client = Depends(get_db)):
    """Delete a schedule. Its calendar events are not deleted."""
    ScheduleService(db).delete_schedule(schedule_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
