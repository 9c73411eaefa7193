"""
Schedules feature: Service layer for the schedule aggregate.
"""

import logging
from supabase import Client

from timetable_api.core.database import is_valid_id, store_errors
from timetable_api.core.exceptions import BadRequestError, NotFoundError
from timetable_api.core.schemas import CourseRef, EntityRef
from timetable_api.features.entities.store import EntityStore
from timetable_api.features.schedules.membership import MEMBER_TABLES, MembershipService
from timetable_api.features.schedules.schemas import ScheduleDetail

logger = logging.getLogger(__name__)

SCHEDULES_TABLE = "schedules"


class ScheduleService:
    """CRUD for schedules plus roster resolution."""

    def __init__(self, db: Client):
        self.db = db
        self.store = EntityStore(db, SCHEDULES_TABLE)
        self.members = MembershipService(db)

    def find_schedule(self, schedule_id: str | None) -> dict | None:
        """Get a single schedule row by ID."""
        if not is_valid_id(schedule_id):
            return None
        with store_errors("get schedule"):
            result = (
                self.db.table(SCHEDULES_TABLE)
                .select("*")
                .eq("id", schedule_id)
                .execute()
            )
        return result.data[0] if result.data else None

    def require_schedule(self, schedule_id: str | None) -> dict:
        """Referenced schedules must exist; a dangling reference is the client's fault."""
        schedule = self.find_schedule(schedule_id)
        if schedule is None:
            raise BadRequestError("Invalid schedule.")
        return schedule

    def list_schedules(self) -> list[EntityRef]:
        return [
            EntityRef(id=row["id"], display_name=row["display_name"])
            for row in self.store.list_all()
        ]

    def get_schedule(self, schedule_id: str) -> ScheduleDetail:
        """Schedule with teachers/groups/locations/courses populated.

        Member ids whose record was deleted are skipped.
        """
        schedule = self.find_schedule(schedule_id)
        if schedule is None:
            raise NotFoundError("Schedule not found.")

        member_ids = self.members.member_ids(schedule_id)
        resolved: dict[str, list[dict]] = {}
        for category, table in MEMBER_TABLES.items():
            ids = member_ids.get(category, [])
            rows = EntityStore(self.db, table).get_many(ids)
            resolved[category] = [rows[i] for i in ids if i in rows]

        return ScheduleDetail(
            id=schedule["id"],
            display_name=schedule["display_name"],
            start=schedule.get("start"),
            end=schedule.get("end"),
            teachers=[_entity_ref(row) for row in resolved["teacher"]],
            groups=[_entity_ref(row) for row in resolved["group"]],
            locations=[_entity_ref(row) for row in resolved["location"]],
            courses=[
                CourseRef(id=row["id"], display_name=row["display_name"], subject=row["subject"])
                for row in resolved["course"]
            ],
        )

    def create_schedule(
        self,
        display_name: str,
        start: str | None = None,
        end: str | None = None,
    ) -> str:
        record = self.store.create({
            "display_name": display_name,
            "start": start,
            "end": end,
        })
        logger.info(f"Created schedule {record['id']} ({display_name})")
        return record["id"]

    def update_schedule(self, schedule_id: str, update_data: dict) -> None:
        clean_data = {k: v for k, v in update_data.items() if v is not None}
        self.store.update(schedule_id, clean_data)

    def delete_schedule(self, schedule_id: str) -> None:
        """Delete the schedule and its membership sets. Events are kept."""
        self.store.delete(schedule_id)
        self.members.unlink_all(schedule_id)


def _entity_ref(row: dict) -> EntityRef:
    return EntityRef(id=row["id"], display_name=row["display_name"])
