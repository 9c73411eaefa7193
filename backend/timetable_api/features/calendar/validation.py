"""
Calendar feature: field checks run before any write.
"""

from timetable_api.core.database import is_valid_id
from timetable_api.core.exceptions import BadRequestError
from timetable_api.features.calendar.schemas import CalendarEventCreate

# Recognized event tags. Adding a tag is a data change only.
EVENT_TYPES: frozenset[str] = frozenset({"LUNCH"})

REQUIRED_RELATIONS = ("locations", "teachers", "groups")


def validate_type(event_type: str | None) -> None:
    if event_type is not None and event_type not in EVENT_TYPES:
        raise BadRequestError("Invalid type.")


def validate_duration(duration: int | None, required: bool = False) -> None:
    """Durations are never negative. Zero is a valid duration, not a missing one."""
    if duration is None:
        if required:
            raise BadRequestError("Invalid duration.")
        return
    if duration < 0:
        raise BadRequestError("Invalid duration.")


def validate_references(fields: dict) -> None:
    """Every referenced id must be well-formed; whether it exists is not checked."""
    course = fields.get("course")
    if course is not None and not is_valid_id(course):
        raise BadRequestError("Invalid course.")

    for relation in REQUIRED_RELATIONS:
        ids = fields.get(relation) or []
        if not all(is_valid_id(ref) for ref in ids):
            raise BadRequestError(f"Invalid {relation}.")


def validate_new_event(data: CalendarEventCreate) -> None:
    """Full creation: every field an event cannot live without must be present."""
    validate_type(data.type)
    validate_duration(data.duration, required=True)

    if data.start is None or data.end is None:
        raise BadRequestError("Invalid start or end.")

    for relation in REQUIRED_RELATIONS:
        if not getattr(data, relation):
            raise BadRequestError(f"Missing {relation}.")

    validate_references(data.model_dump(include={"course", *REQUIRED_RELATIONS}))


def validate_event_update(update_data: dict) -> None:
    """Partial update: only the fields being written are checked."""
    validate_type(update_data.get("type"))
    validate_duration(update_data.get("duration"))
    validate_references(update_data)
