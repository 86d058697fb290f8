"""Dog Registry — dog lifecycle (register, adopt, remove) and list queries.

Invariants:
    - Guards come from core/enforce_lifecycle.py; this module only applies them
    - adopt is ONE conditional UPDATE (status still 'available', adopter is not owner):
      at most one concurrent adopter can affect the row
    - remove is ONE conditional DELETE (owner matches, status still 'available')
    - A conditional write touching zero rows is re-checked: gone -> 404, else conflict
    - Lists sort by their key descending with id as tie-breaker; pages past the end are empty

Design Decisions:
    - Pre-check read before the conditional write: gives precise errors in the
      common case, the WHERE clause keeps correctness in the racy case
    - Owner/adopter views resolved through UserDirectory.public_views, one query per page
    - Page windows beyond the total skip the SELECT entirely
"""

import logging
from datetime import datetime, timezone
from typing import NoReturn

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.core.domain_types import DogId, DogSnapshot, DogStatus, UserId
from dog_adoption.core.enforce_input import (
    check_adoption_message, check_dog_fields, normalize_text,
)
from dog_adoption.core.enforce_lifecycle import (
    check_adoption, check_removal, dog_not_found, invalid_dog_id, parse_dog_id,
)
from dog_adoption.core.errors import (
    AdoptedDogRemovalError, DogAdoptionError, DogAlreadyAdoptedError,
    ErrorContext,
)
from dog_adoption.core.pagination import (
    build_page_request, build_pagination, parse_status_filter,
)
from dog_adoption.models.dog import Dog
from dog_adoption.schemas.common import PaginationView
from dog_adoption.schemas.dog import (
    AdoptedDogView, AdoptedDogsPage, DogAdoptedView, DogCreatedView,
    RegisteredDogView, RegisteredDogsPage,
)
from dog_adoption.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)


def snapshot(dog: Dog) -> DogSnapshot:
    return DogSnapshot(
        id=DogId(dog.id),
        owner_id=UserId(dog.owner_id),
        adopter_id=UserId(dog.adopter_id) if dog.adopter_id else None,
        status=DogStatus(dog.status),
    )


class DogRegistry:
    """Owns dog records: creation, the adoption transition, deletion, listing."""

    def __init__(self, db: AsyncSession, users: UserDirectory):
        self.db = db
        self.users = users

    # ─── Lifecycle ──────────────────────────────────────────────

    async def register(
        self, owner_id: UserId, name: str | None, description: str | None,
    ) -> DogCreatedView:
        """List a new dog as available, owned by owner_id."""
        error = check_dog_fields(name, description)
        if error:
            raise error

        dog = Dog(
            name=normalize_text(name),
            description=normalize_text(description),
            owner_id=owner_id,
            status=DogStatus.AVAILABLE.value,
        )
        self.db.add(dog)
        await self.db.commit()

        logger.info(
            "Dog registered",
            extra={"user_id": str(owner_id), "dog_id": str(dog.id)},
        )
        return DogCreatedView(
            id=dog.id,
            name=dog.name,
            description=dog.description,
            status=DogStatus(dog.status),
            created_at=dog.created_at,
        )

    async def adopt(
        self,
        raw_dog_id: str,
        adopter_id: UserId,
        thank_you_message: str | None = None,
    ) -> DogAdoptedView:
        """Transition available -> adopted for adopter_id, exactly once."""
        dog_id = parse_dog_id(raw_dog_id)
        if dog_id is None:
            raise invalid_dog_id()
        error = check_adoption_message(thank_you_message)
        if error:
            raise error

        dog = await self.db.get(Dog, dog_id)
        error = check_adoption(
            snapshot(dog) if dog else None, dog_id, adopter_id,
        )
        if error:
            raise error

        result = await self.db.execute(
            update(Dog)
            .where(Dog.id == dog_id)
            .where(Dog.status == DogStatus.AVAILABLE.value)
            .where(Dog.owner_id != adopter_id)
            .values(
                status=DogStatus.ADOPTED.value,
                adopter_id=adopter_id,
                adoption_date=datetime.now(timezone.utc),
                adoption_message=normalize_text(thank_you_message),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            await self._raise_lost_race(
                dog_id, DogAlreadyAdoptedError(
                    ErrorContext(user_id=str(adopter_id), dog_id=str(dog_id)),
                ),
            )
        await self.db.commit()
        await self.db.refresh(dog)

        logger.info(
            "Dog adopted",
            extra={"user_id": str(adopter_id), "dog_id": str(dog_id)},
        )
        owners = await self.users.public_views([dog.owner_id])
        return DogAdoptedView(
            id=dog.id,
            name=dog.name,
            description=dog.description,
            status=DogStatus(dog.status),
            owner=owners[dog.owner_id],
            adoption_message=dog.adoption_message,
            adoption_date=dog.adoption_date,
        )

    async def remove(self, raw_dog_id: str, requester_id: UserId) -> None:
        """Delete an available dog on behalf of its owner."""
        dog_id = parse_dog_id(raw_dog_id)
        if dog_id is None:
            raise invalid_dog_id()

        dog = await self.db.get(Dog, dog_id)
        error = check_removal(
            snapshot(dog) if dog else None, dog_id, requester_id,
        )
        if error:
            raise error

        result = await self.db.execute(
            delete(Dog)
            .where(Dog.id == dog_id)
            .where(Dog.owner_id == requester_id)
            .where(Dog.status == DogStatus.AVAILABLE.value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            await self._raise_lost_race(
                dog_id, AdoptedDogRemovalError(
                    ErrorContext(user_id=str(requester_id), dog_id=str(dog_id)),
                ),
            )
        await self.db.commit()

        logger.info(
            "Dog removed",
            extra={"user_id": str(requester_id), "dog_id": str(dog_id)},
        )

    async def _raise_lost_race(
        self, dog_id: DogId, conflict: DogAdoptionError,
    ) -> NoReturn:
        """A conditional write matched nothing: the dog vanished or changed state."""
        still_there = await self.db.scalar(select(Dog.id).where(Dog.id == dog_id))
        logger.warning(
            "Conditional write matched no rows",
            extra={"dog_id": str(dog_id)},
        )
        if still_there is None:
            raise dog_not_found(dog_id)
        raise conflict

    # ─── Queries ────────────────────────────────────────────────

    async def list_by_owner(
        self,
        owner_id: UserId,
        status_filter: str | None = None,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> RegisteredDogsPage:
        """Dogs listed by owner_id, newest first, optionally filtered by status."""
        request = build_page_request(page, limit)
        conditions = [Dog.owner_id == owner_id]
        status = parse_status_filter(status_filter)
        if status is not None:
            conditions.append(Dog.status == status.value)

        total, dogs = await self._page(
            conditions, (Dog.created_at.desc(), Dog.id.desc()), request,
        )
        adopters = await self.users.public_views(
            d.adopter_id for d in dogs if d.adopter_id
        )
        return RegisteredDogsPage(
            dogs=[
                RegisteredDogView(
                    id=d.id,
                    name=d.name,
                    description=d.description,
                    status=DogStatus(d.status),
                    adopter=adopters.get(d.adopter_id) if d.adopter_id else None,
                    adoption_message=d.adoption_message,
                    adoption_date=d.adoption_date,
                    created_at=d.created_at,
                )
                for d in dogs
            ],
            pagination=PaginationView(**build_pagination(total, request)),
        )

    async def list_by_adopter(
        self,
        adopter_id: UserId,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> AdoptedDogsPage:
        """Dogs adopted by adopter_id, most recent adoption first."""
        request = build_page_request(page, limit)
        conditions = [
            Dog.adopter_id == adopter_id,
            Dog.status == DogStatus.ADOPTED.value,
        ]

        total, dogs = await self._page(
            conditions, (Dog.adoption_date.desc(), Dog.id.desc()), request,
        )
        owners = await self.users.public_views(d.owner_id for d in dogs)
        return AdoptedDogsPage(
            dogs=[
                AdoptedDogView(
                    id=d.id,
                    name=d.name,
                    description=d.description,
                    original_owner=owners[d.owner_id],
                    adoption_message=d.adoption_message,
                    adoption_date=d.adoption_date,
                )
                for d in dogs
            ],
            pagination=PaginationView(**build_pagination(total, request)),
        )

    async def _page(self, conditions, order_by, request) -> tuple[int, list[Dog]]:
        total = await self.db.scalar(
            select(func.count()).select_from(Dog).where(*conditions),
        )
        if request.offset >= total:
            return total, []
        result = await self.db.execute(
            select(Dog)
            .where(*conditions)
            .order_by(*order_by)
            .offset(request.offset)
            .limit(request.limit)
        )
        return total, list(result.scalars().all())
