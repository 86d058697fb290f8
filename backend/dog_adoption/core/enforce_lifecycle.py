"""Dog Lifecycle Enforcement — the available -> adopted state machine and its guards.

Invariants:
    - Transitions: available -> adopted (exactly once); available -> deleted (owner only)
    - Adopted dogs are terminal: never re-adopted, never deleted
    - owner and adopter are never the same user
    - Checks are PURE: take a DogSnapshot, return an error or None

Design Decisions:
    - Check order is part of the contract:
        adopt:  exists -> not already adopted -> not own dog
        remove: exists -> requester is owner -> not adopted
      so an owner removing their adopted dog sees the conflict, a stranger sees 403
    - Malformed identifiers are parsed here, not in routes, so services share one rule
"""

from uuid import UUID

from dog_adoption.core.domain_types import DogId, DogSnapshot, DogStatus, UserId
from dog_adoption.core.errors import (
    DogAdoptionError,
    DogAlreadyAdoptedError,
    AdoptedDogRemovalError,
    ErrorContext,
    ForbiddenError,
    InvalidInputError,
    ResourceNotFoundError,
    SelfAdoptionError,
)


INVALID_DOG_ID = "Invalid dog ID"
DOG_NOT_FOUND = "Dog not found"
NOT_DOG_OWNER = "You can only remove dogs you registered"


def parse_dog_id(raw: str) -> DogId | None:
    """Parse a path identifier. None when malformed."""
    try:
        return DogId(UUID(raw))
    except (ValueError, TypeError, AttributeError):
        return None


def invalid_dog_id() -> InvalidInputError:
    return InvalidInputError(INVALID_DOG_ID)


def dog_not_found(dog_id: DogId) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        DOG_NOT_FOUND, ErrorContext(dog_id=str(dog_id)),
    )


def check_adoption(
    dog: DogSnapshot | None, dog_id: DogId, adopter_id: UserId,
) -> DogAdoptionError | None:
    """Adoption guard. None means the transition may be attempted."""
    if dog is None:
        return dog_not_found(dog_id)
    context = ErrorContext(user_id=str(adopter_id), dog_id=str(dog.id))
    if dog.status == DogStatus.ADOPTED:
        return DogAlreadyAdoptedError(context)
    if dog.owner_id == adopter_id:
        return SelfAdoptionError(context)
    return None


def check_removal(
    dog: DogSnapshot | None, dog_id: DogId, requester_id: UserId,
) -> DogAdoptionError | None:
    """Removal guard. None means the delete may be attempted."""
    if dog is None:
        return dog_not_found(dog_id)
    context = ErrorContext(user_id=str(requester_id), dog_id=str(dog.id))
    if dog.owner_id != requester_id:
        return ForbiddenError(NOT_DOG_OWNER, context)
    if dog.status == DogStatus.ADOPTED:
        return AdoptedDogRemovalError(context)
    return None
