"""
Courses feature: Service layer for course management.
"""

import logging
from supabase import Client

from timetable_api.core.schemas import CourseRef
from timetable_api.features.entities.store import EntityStore
from timetable_api.features.schedules.membership import COURSE_CATEGORY, MembershipService
from timetable_api.features.schedules.service import ScheduleService

logger = logging.getLogger(__name__)

COURSES_TABLE = "courses"


class CoursesService:
    """CRUD for courses. Schedule-scoped calls also maintain the course roster."""

    def __init__(self, db: Client):
        self.db = db
        self.store = EntityStore(db, COURSES_TABLE)
        self.schedules = ScheduleService(db)
        self.members = MembershipService(db)

    def create_course(
        self,
        display_name: str,
        subject: str,
        schedule_id: str | None = None,
    ) -> str:
        if schedule_id is not None:
            self.schedules.require_schedule(schedule_id)

        record = self.store.create({"display_name": display_name, "subject": subject})
        logger.info(f"Created course {record['id']} ({display_name})")

        if schedule_id is not None:
            self.members.link(schedule_id, COURSE_CATEGORY, record["id"])
        return record["id"]

    def list_courses(self) -> list[CourseRef]:
        return [
            CourseRef(id=row["id"], display_name=row["display_name"], subject=row["subject"])
            for row in self.store.list_all()
        ]

    def update_course(self, course_id: str, update_data: dict) -> None:
        clean_data = {k: v for k, v in update_data.items() if v is not None}
        self.store.update(course_id, clean_data)

    def delete_course(self, course_id: str, schedule_id: str | None = None) -> None:
        self.delete_courses([course_id], schedule_id)

    def delete_courses(self, course_ids: list[str], schedule_id: str | None = None) -> None:
        """Delete courses, then pull them from the schedule's roster when one is given."""
        if schedule_id is not None:
            self.schedules.require_schedule(schedule_id)

        self.store.delete_many(course_ids)

        if schedule_id is not None:
            self.members.unlink(schedule_id, COURSE_CATEGORY, course_ids)
