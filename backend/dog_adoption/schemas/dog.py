"""Dog Schemas — listing payloads and the views returned per operation.

Invariants:
    - DogCreate/AdoptRequest accept raw text; trimming and limits are enforced in core
    - Each view exposes only the fields its operation promises
    - Owner/adopter appear as UserPublic, never as raw ids

Design Decisions:
    - One view per operation instead of one Dog view with optional fields:
      the registered list shows the adopter, the adopted list shows the original owner
"""

from datetime import datetime
from uuid import UUID

from dog_adoption.core.domain_types import DogStatus
from dog_adoption.schemas.common import (
    CamelModel, MessageResponse, PaginationView, UserPublic,
)


# --- Requests -----------------------------------------------------------------

class DogCreate(CamelModel):
    name: str | None = None
    description: str | None = None


class AdoptRequest(CamelModel):
    """Optional thank-you note, sent as thankYouMessage."""
    thank_you_message: str | None = None


# --- Views --------------------------------------------------------------------

class DogCreatedView(CamelModel):
    id: UUID
    name: str
    description: str
    status: DogStatus
    created_at: datetime


class DogAdoptedView(CamelModel):
    id: UUID
    name: str
    description: str
    status: DogStatus
    owner: UserPublic
    adoption_message: str | None = None
    adoption_date: datetime


class RegisteredDogView(CamelModel):
    """Owner's list entry — shows who adopted, if anyone."""
    id: UUID
    name: str
    description: str
    status: DogStatus
    adopter: UserPublic | None = None
    adoption_message: str | None = None
    adoption_date: datetime | None = None
    created_at: datetime


class AdoptedDogView(CamelModel):
    """Adopter's list entry — shows who listed the dog."""
    id: UUID
    name: str
    description: str
    original_owner: UserPublic
    adoption_message: str | None = None
    adoption_date: datetime


# --- Envelopes ----------------------------------------------------------------

class DogCreateResponse(MessageResponse):
    dog: DogCreatedView


class DogAdoptResponse(MessageResponse):
    dog: DogAdoptedView


class RegisteredDogsPage(CamelModel):
    dogs: list[RegisteredDogView]
    pagination: PaginationView


class AdoptedDogsPage(CamelModel):
    dogs: list[AdoptedDogView]
    pagination: PaginationView
