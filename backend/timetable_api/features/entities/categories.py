"""
Entities feature: category registry.

A category is resolved to its table once, at the request boundary; the rest
of the code works with the resulting EntityStore.
"""

from enum import Enum

from supabase import Client

from timetable_api.core.exceptions import BadRequestError
from timetable_api.features.entities.store import EntityStore


class EntityCategory(str, Enum):
    TEACHER = "teacher"
    GROUP = "group"
    LOCATION = "location"


ENTITY_TABLES: dict[EntityCategory, str] = {
    EntityCategory.TEACHER: "teachers",
    EntityCategory.GROUP: "groups",
    EntityCategory.LOCATION: "locations",
}


def parse_category(value: str | None) -> EntityCategory:
    """Map a raw category string to EntityCategory or reject the request."""
    try:
        return EntityCategory(value)
    except ValueError:
        raise BadRequestError("Invalid category.")


def entity_store(db: Client, category: EntityCategory) -> EntityStore:
    return EntityStore(db, ENTITY_TABLES[category])
