"""
Entities feature: Service layer for teachers, groups and locations.
"""

import logging
from supabase import Client

from timetable_api.core.schemas import EntityRef
from timetable_api.features.entities.categories import ENTITY_TABLES, EntityCategory, entity_store
from timetable_api.features.schedules.membership import MembershipService
from timetable_api.features.schedules.service import ScheduleService

logger = logging.getLogger(__name__)


class EntitiesService:
    """Leaf-entity lifecycle, keeping schedule rosters in step when a schedule is given."""

    def __init__(self, db: Client):
        self.db = db
        self.schedules = ScheduleService(db)
        self.members = MembershipService(db)

    def create_entity(
        self,
        category: EntityCategory,
        display_name: str,
        schedule_id: str | None = None,
    ) -> str:
        """Create the record, then add it to the schedule's roster.

        The schedule is checked before anything is written.
        """
        if schedule_id is not None:
            self.schedules.require_schedule(schedule_id)

        record = entity_store(self.db, category).create({"display_name": display_name})
        logger.info(f"Created {category.value} {record['id']} ({display_name})")

        if schedule_id is not None:
            self.members.link(schedule_id, category.value, record["id"])
        return record["id"]

    def list_entities(self, category: EntityCategory | None = None) -> list[EntityRef]:
        """List one category, or every category (teachers, groups, locations) when None."""
        categories = [category] if category else list(ENTITY_TABLES)
        entities = []
        for c in categories:
            entities.extend(
                EntityRef(id=row["id"], display_name=row["display_name"])
                for row in entity_store(self.db, c).list_all()
            )
        return entities

    def update_entity(self, category: EntityCategory, entity_id: str, update_data: dict) -> None:
        clean_data = {k: v for k, v in update_data.items() if v is not None}
        entity_store(self.db, category).update(entity_id, clean_data)

    def delete_entity(
        self,
        category: EntityCategory,
        entity_id: str,
        schedule_id: str | None = None,
    ) -> None:
        """Delete the record, then pull it from the schedule's roster.

        Events referencing the record are left as they are.
        """
        if schedule_id is not None:
            self.schedules.require_schedule(schedule_id)

        entity_store(self.db, category).delete(entity_id)

        if schedule_id is not None:
            self.members.unlink(schedule_id, category.value, [entity_id])
