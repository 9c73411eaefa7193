"""
Shared schemas: camelCase wire format over snake_case Python/store fields.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys; accepts either key style on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatedResponse(CamelModel):
    """Response for every create endpoint."""
    id: str


class EntityRef(CamelModel):
    """Displayable shape of a teacher, group, location or schedule."""
    id: str
    display_name: str


class CourseRef(CamelModel):
    """Displayable shape of a course."""
    id: str
    display_name: str
    subject: str
