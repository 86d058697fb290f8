"""Dog Routes — register, adopt, remove, and the owner/adopter lists.

Invariants:
    - Every endpoint requires a bearer token (router-level dependency)
    - dog_id arrives as raw text; malformed ids are a 400 from the registry, not a 422
    - page/limit/status arrive as raw text; coercion lives in core/pagination.py

Design Decisions:
    - /registered and /adopted are static paths: no GET /{dog_id} route competes with them
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from dog_adoption.api.dependencies import get_current_user, get_dog_registry
from dog_adoption.core.domain_types import UserIdentity
from dog_adoption.schemas.common import MessageResponse
from dog_adoption.schemas.dog import (
    AdoptRequest, AdoptedDogsPage, DogAdoptResponse, DogCreate,
    DogCreateResponse, RegisteredDogsPage,
)
from dog_adoption.services.dog_registry import DogRegistry

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/dogs", tags=["dogs"],
    dependencies=[Depends(get_current_user)],
)


@router.post(
    "", response_model=DogCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_dog(
    body: DogCreate | None = None,
    current_user: UserIdentity = Depends(get_current_user),
    dogs: DogRegistry = Depends(get_dog_registry),
):
    """List a dog for adoption."""
    body = body or DogCreate()
    dog = await dogs.register(current_user.user_id, body.name, body.description)
    return DogCreateResponse(message="Dog registered successfully", dog=dog)


@router.post("/{dog_id}/adopt", response_model=DogAdoptResponse)
async def adopt_dog(
    dog_id: str,
    body: AdoptRequest | None = None,
    current_user: UserIdentity = Depends(get_current_user),
    dogs: DogRegistry = Depends(get_dog_registry),
):
    """Adopt someone else's available dog."""
    body = body or AdoptRequest()
    dog = await dogs.adopt(dog_id, current_user.user_id, body.thank_you_message)
    return DogAdoptResponse(message="Dog adopted successfully", dog=dog)


@router.delete("/{dog_id}", response_model=MessageResponse)
async def remove_dog(
    dog_id: str,
    current_user: UserIdentity = Depends(get_current_user),
    dogs: DogRegistry = Depends(get_dog_registry),
):
    """Remove one of your own dogs while it is still available."""
    await dogs.remove(dog_id, current_user.user_id)
    return MessageResponse(message="Dog removed successfully")


@router.get("/registered", response_model=RegisteredDogsPage)
async def list_registered_dogs(
    status_filter: str | None = Query(None, alias="status"),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    current_user: UserIdentity = Depends(get_current_user),
    dogs: DogRegistry = Depends(get_dog_registry),
):
    """Dogs you listed, newest first."""
    return await dogs.list_by_owner(
        current_user.user_id, status_filter, page, limit,
    )


@router.get("/adopted", response_model=AdoptedDogsPage)
async def list_adopted_dogs(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    current_user: UserIdentity = Depends(get_current_user),
    dogs: DogRegistry = Depends(get_dog_registry),
):
    """Dogs you adopted, most recent first."""
    return await dogs.list_by_adopter(current_user.user_id, page, limit)
