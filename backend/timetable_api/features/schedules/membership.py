"""
Schedules feature: membership maintenance.

A schedule's teacher/group/location/course sets are rows of
``schedule_members``. Adding is an upsert that ignores duplicates and
removing is a row delete, so concurrent requests never overwrite each
other's changes to the same set.
"""

import logging
from supabase import Client

from timetable_api.config import get_settings
from timetable_api.core.database import is_valid_id, store_errors
from timetable_api.core.exceptions import ServerError

logger = logging.getLogger(__name__)

MEMBERS_TABLE = "schedule_members"
COURSE_CATEGORY = "course"

# member category -> leaf table holding the referenced records
MEMBER_TABLES: dict[str, str] = {
    "teacher": "teachers",
    "group": "groups",
    "location": "locations",
    COURSE_CATEGORY: "courses",
}


class MembershipService:
    """Add-to-set / pull-from-set on a schedule's membership lists."""

    def __init__(self, db: Client):
        self.db = db
        self.settings = get_settings()

    def link(self, schedule_id: str, category: str, member_id: str) -> None:
        """Add member_id to the schedule's set for category.

        Idempotent, so the step alone is retried. When every attempt fails the
        member record stays persisted without a schedule (no rollback).
        """
        row = {
            "schedule_id": schedule_id,
            "category": category,
            "member_id": member_id,
        }
        attempts = max(1, self.settings.MEMBERSHIP_LINK_ATTEMPTS)
        for attempt in range(1, attempts + 1):
            try:
                self.db.table(MEMBERS_TABLE).upsert(
                    row,
                    on_conflict="schedule_id,category,member_id",
                    ignore_duplicates=True,
                ).execute()
                return
            except Exception as e:
                logger.warning(
                    f"⚠️ Linking {category} {member_id} to schedule {schedule_id} "
                    f"failed (attempt {attempt}/{attempts}): {e}"
                )

        logger.error(f"❌ {category} {member_id} left without schedule {schedule_id}")
        raise ServerError()

    def unlink(self, schedule_id: str, category: str, member_ids: list[str]) -> None:
        """Pull member ids from the schedule's set for category."""
        wanted = [i for i in member_ids if is_valid_id(i)]
        if not wanted or not is_valid_id(schedule_id):
            return
        with store_errors(f"unlink {category} from schedule"):
            (
                self.db.table(MEMBERS_TABLE)
                .delete()
                .eq("schedule_id", schedule_id)
                .eq("category", category)
                .in_("member_id", wanted)
                .execute()
            )

    def unlink_all(self, schedule_id: str) -> None:
        """Drop every membership row of a schedule (its sets die with it)."""
        if not is_valid_id(schedule_id):
            return
        with store_errors("clear schedule members"):
            self.db.table(MEMBERS_TABLE).delete().eq("schedule_id", schedule_id).execute()

    def member_ids(self, schedule_id: str) -> dict[str, list[str]]:
        """Membership sets of a schedule keyed by category. Ids may dangle."""
        grouped: dict[str, list[str]] = {category: [] for category in MEMBER_TABLES}
        with store_errors("read schedule members"):
            result = (
                self.db.table(MEMBERS_TABLE)
                .select("category, member_id")
                .eq("schedule_id", schedule_id)
                .execute()
            )
        for row in result.data or []:
            members = grouped.setdefault(row["category"], [])
            if row["member_id"] not in members:
                members.append(row["member_id"])
        return grouped
