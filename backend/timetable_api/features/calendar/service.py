"""
Calendar feature: Service layer for calendar events and the weekly event query.
"""

import logging
from datetime import datetime, time, timedelta, timezone
from supabase import Client

from timetable_api.config import get_settings
from timetable_api.core.database import is_valid_id, store_errors
from timetable_api.core.exceptions import BadRequestError, ServerError
from timetable_api.core.schemas import CourseRef, EntityRef
from timetable_api.features.calendar.schemas import CalendarEventCreate, CalendarEventResponse
from timetable_api.features.calendar.validation import validate_event_update, validate_new_event
from timetable_api.features.entities.store import EntityStore
from timetable_api.features.schedules.service import ScheduleService

logger = logging.getLogger(__name__)

EVENTS_TABLE = "calendar_events"

# event relation column -> leaf table it references
RELATION_TABLES = {
    "teachers": "teachers",
    "groups": "groups",
    "locations": "locations",
}


def week_window(week: str) -> tuple[datetime, datetime]:
    """Half-open window from `week` up to the following Monday 00:00.

    `week` is an ISO date or datetime; values without an offset are UTC.
    """
    try:
        start = datetime.fromisoformat(week)
    except ValueError:
        raise BadRequestError("Invalid week.")
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)

    next_monday = start.date() + timedelta(days=7 - start.weekday())
    end = datetime.combine(next_monday, time.min, tzinfo=start.tzinfo)
    return start, end


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CalendarService:
    """CRUD operations for calendar events with week-window queries."""

    def __init__(self, db: Client):
        self.db = db
        self.settings = get_settings()
        self.schedules = ScheduleService(db)

    def create_event(self, data: CalendarEventCreate) -> str:
        """Validate, check the owning schedule, then insert. Returns the new event id."""
        validate_new_event(data)
        self.schedules.require_schedule(data.belongs_to)

        now = datetime.now(timezone.utc).isoformat()
        insert_data = {
            "belongs_to": data.belongs_to,
            "display_name": data.display_name,
            "start": _as_utc(data.start).isoformat(),
            "end": _as_utc(data.end).isoformat(),
            "duration": data.duration,
            "type": data.type,
            "course": data.course,
            "teachers": data.teachers,
            "groups": data.groups,
            "locations": data.locations,
            "color": data.color or self.settings.DEFAULT_EVENT_COLOR,
            "cancelled": data.cancelled,
            "created_at": now,
            "updated_at": now,
        }
        with store_errors("insert calendar event"):
            result = self.db.table(EVENTS_TABLE).insert(insert_data).execute()
        if not result.data:
            raise ServerError()
        return result.data[0]["id"]

    def get_events(
        self,
        schedule_id: str,
        week: str | None,
        in_locations: str | None = None,
        teachers: str | None = None,
        groups: str | None = None,
    ) -> list[CalendarEventResponse]:
        """Events of one schedule starting inside the week of `week`.

        At least one relation filter is required; each supplied filter keeps
        only events whose relation list contains that id. Results come back in
        store order.
        """
        schedule = self.schedules.require_schedule(schedule_id)

        if not week or not (in_locations or teachers or groups):
            raise BadRequestError("Invalid query parameters.")
        for value in (in_locations, teachers, groups):
            if value and not is_valid_id(value):
                raise BadRequestError("Invalid query parameters.")

        start, end = week_window(week)

        query = (
            self.db.table(EVENTS_TABLE)
            .select("*")
            .eq("belongs_to", schedule["id"])
            .gte("start", start.isoformat())
            .lt("start", end.isoformat())
        )
        # PostgreSQL array contains operator
        if in_locations:
            query = query.contains("locations", [in_locations])
        if teachers:
            query = query.contains("teachers", [teachers])
        if groups:
            query = query.contains("groups", [groups])

        with store_errors("query calendar events"):
            result = query.execute()

        return self._populate(result.data or [], schedule)

    def update_event(self, event_id: str, update_data: dict) -> None:
        """Write only the fields present; unknown ids are a no-op."""
        clean_data = {k: v for k, v in update_data.items() if v is not None and k != "id"}
        validate_event_update(clean_data)
        if not clean_data or not is_valid_id(event_id):
            return

        for field in ("start", "end"):
            if field in clean_data:
                clean_data[field] = _as_utc(clean_data[field]).isoformat()
        clean_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        with store_errors("update calendar event"):
            self.db.table(EVENTS_TABLE).update(clean_data).eq("id", event_id).execute()

    def delete_event(self, event_id: str) -> None:
        """Hard delete an event."""
        if not is_valid_id(event_id):
            return
        with store_errors("delete calendar event"):
            self.db.table(EVENTS_TABLE).delete().eq("id", event_id).execute()

    # ── Population ───────────────────────────────────────

    def _populate(self, rows: list[dict], schedule: dict) -> list[CalendarEventResponse]:
        """Resolve every reference of every row with one lookup per table.

        References to deleted records are dropped from the output.
        """
        lookups: dict[str, dict[str, dict]] = {}
        for column, table in RELATION_TABLES.items():
            ids = [i for row in rows for i in row.get(column) or []]
            lookups[column] = EntityStore(self.db, table).get_many(ids)
        courses = EntityStore(self.db, "courses").get_many(
            [row["course"] for row in rows if row.get("course")]
        )

        schedule_ref = EntityRef(id=schedule["id"], display_name=schedule["display_name"])

        def refs(row: dict, column: str) -> list[EntityRef]:
            found = lookups[column]
            return [
                EntityRef(id=i, display_name=found[i]["display_name"])
                for i in row.get(column) or []
                if i in found
            ]

        events = []
        for row in rows:
            course = courses.get(row.get("course") or "")
            events.append(CalendarEventResponse(
                id=row["id"],
                belongs_to=schedule_ref,
                display_name=row.get("display_name"),
                start=row["start"],
                end=row["end"],
                duration=row["duration"],
                type=row.get("type"),
                course=CourseRef(
                    id=course["id"],
                    display_name=course["display_name"],
                    subject=course["subject"],
                ) if course else None,
                in_locations=refs(row, "locations"),
                teachers=refs(row, "teachers"),
                groups=refs(row, "groups"),
                created_at=row["created_at"],
                updated_at=row["updated_at"],
                color=row["color"],
                cancelled=row.get("cancelled") or False,
            ))
        return events
