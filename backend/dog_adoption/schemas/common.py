"""Shared Schemas — camelCase base model, public user view, pagination block.

Invariants:
    - UserPublic never carries the password hash
    - PaginationView mirrors core/pagination.build_pagination keys

Design Decisions:
    - alias_generator=to_camel + populate_by_name: build views with snake_case
      kwargs, serialize with camelCase keys
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every wire-facing schema."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserPublic(CamelModel):
    """Public user view — safe to return to any client."""
    id: UUID
    username: str


class PaginationView(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next: bool
    has_prev: bool


class MessageResponse(CamelModel):
    message: str
