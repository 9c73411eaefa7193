"""
Entities feature: API routes for teachers, groups and locations.
"""

from fastapi import APIRouter, Depends, Response, status
from supabase import Client

from timetable_api.core.dependencies import get_db
from timetable_api.core.schemas import CreatedResponse, EntityRef
from timetable_api.features.entities.categories import parse_category
from timetable_api.features.entities.schemas import EntityCreate, EntityUpdate
from timetable_api.features.entities.service import EntitiesService

router = APIRouter()


@router.get("", response_model=list[EntityRef])
def list_entities(
    category: str | None = None,
    db: Client = Depends(get_db),
):
    """List teachers, groups or locations; all of them when no category is given."""
    parsed = parse_category(category) if category else None
    return EntitiesService(db).list_entities(parsed)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_entity(data: EntityCreate, db: Client = Depends(get_db)):
    """Create a teacher, group or location (optionally inside a schedule)."""
    entity_id = EntitiesService(db).create_entity(
        category=parse_category(data.category),
        display_name=data.display_name,
        schedule_id=data.schedule,
    )
    return CreatedResponse(id=entity_id)


@router.put("", status_code=status.HTTP_204_NO_CONTENT)
def update_entity(
    id: str,
    category: str,
    data: EntityUpdate,
    db: Client = Depends(get_db),
):
    """Rename a teacher, group or location."""
    EntitiesService(db).update_entity(
        parse_category(category), id, data.model_dump(exclude_unset=True)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_entity(
    id: str,
    category: str,
    schedule: str | None = None,
    db: Client = Depends(get_db),
):
    """Delete a teacher, group or location (and pull it from the schedule's roster)."""
    EntitiesService(db).delete_entity(parse_category(category), id, schedule)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
