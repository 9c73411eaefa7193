"""
Courses feature: API routes for course management.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from supabase import Client

from timetable_api.core.dependencies import get_db
from timetable_api.core.schemas import CourseRef, CreatedResponse
from timetable_api.features.courses.schemas import CourseCreate, CourseUpdate
from timetable_api.features.courses.service import CoursesService

router = APIRouter()


@router.get("", response_model=list[CourseRef])
def list_courses(db: Client = Depends(get_db)):
    """List all courses."""
    return CoursesService(db).list_courses()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_course(data: CourseCreate, db: Client = Depends(get_db)):
    """Create a course; with `schedule` it is also added to that schedule."""
    course_id = CoursesService(db).create_course(
        display_name=data.display_name,
        subject=data.subject,
        schedule_id=data.schedule,
    )
    return CreatedResponse(id=course_id)


@router.put("", status_code=status.HTTP_204_NO_CONTENT)
def update_course(id: str, data: CourseUpdate, db: Client = Depends(get_db)):
    """Update a course's name or subject."""
    CoursesService(db).update_course(id, data.model_dump(exclude_unset=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/delete-many", status_code=status.HTTP_204_NO_CONTENT)
def delete_courses(
    ids: list[str] = Query(default=[]),
    schedule: str | None = None,
    db: Client = Depends(get_db),
):
    """Delete several courses at once."""
    CoursesService(db).delete_courses(ids, schedule)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(
    id: str,
    schedule: str | None = None,
    db: Client = Depends(get_db),
):
    """Delete one course."""
    CoursesService(db).delete_course(id, schedule)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
