"""
Entities feature: table access for leaf records (teachers, groups, locations, courses).
"""

from supabase import Client

from timetable_api.core.database import is_valid_id, store_errors
from timetable_api.core.exceptions import ServerError


class EntityStore:
    """CRUD on one leaf table. Every call is a single store round trip."""

    def __init__(self, db: Client, table: str):
        self.db = db
        self.table = table

    def create(self, fields: dict) -> dict:
        """Insert a record and return the stored row (with its new id)."""
        with store_errors(f"insert into {self.table}"):
            result = self.db.table(self.table).insert(fields).execute()
        if not result.data:
            raise ServerError()
        return result.data[0]

    def list_all(self) -> list[dict]:
        with store_errors(f"list {self.table}"):
            result = self.db.table(self.table).select("*").execute()
        return result.data or []

    def get_many(self, ids: list[str]) -> dict[str, dict]:
        """Resolve ids to rows, keyed by id. Unknown ids are simply absent."""
        wanted = list(dict.fromkeys(i for i in ids if is_valid_id(i)))
        if not wanted:
            return {}
        with store_errors(f"resolve {self.table}"):
            result = self.db.table(self.table).select("*").in_("id", wanted).execute()
        return {row["id"]: row for row in result.data or []}

    def update(self, record_id: str, fields: dict) -> None:
        """Partial update; unknown ids are a no-op."""
        if not fields or not is_valid_id(record_id):
            return
        with store_errors(f"update {self.table}"):
            self.db.table(self.table).update(fields).eq("id", record_id).execute()

    def delete(self, record_id: str) -> None:
        """Hard delete; unknown ids are a no-op."""
        if not is_valid_id(record_id):
            return
        with store_errors(f"delete from {self.table}"):
            self.db.table(self.table).delete().eq("id", record_id).execute()

    def delete_many(self, record_ids: list[str]) -> None:
        wanted = [i for i in record_ids if is_valid_id(i)]
        if not wanted:
            return
        with store_errors(f"delete from {self.table}"):
            self.db.table(self.table).delete().in_("id", wanted).execute()
