"""Dog Registry — lifecycle transitions and list queries against a real DB.

Invariants:
    - register creates an available dog owned by the caller
    - adopt is exactly-once: a stale pre-check loses to the conditional UPDATE
    - remove only deletes the owner's available dogs
    - lists are scoped to the caller, newest first, paged
"""

from datetime import timezone
from uuid import uuid4

import pytest
from sqlalchemy import select

from dog_adoption.core.domain_types import DogStatus, UserId
from dog_adoption.core.errors import (
    AdoptedDogRemovalError, DogAlreadyAdoptedError, ForbiddenError,
    InvalidInputError, ResourceNotFoundError, SelfAdoptionError,
)
from dog_adoption.models.dog import Dog
from dog_adoption.services.dog_registry import DogRegistry
from dog_adoption.services.user_directory import UserDirectory


@pytest.fixture
async def owner(users):
    view = await users.register("alice", "secret1")
    return UserId(view.id)


@pytest.fixture
async def adopter(users):
    view = await users.register("bob", "secret1")
    return UserId(view.id)


@pytest.fixture
async def dog(registry, owner):
    return await registry.register(owner, "Buddy", "Friendly retriever")


# ─── register ────────────────────────────────────────────────────

async def test_register_creates_available_dog(registry, owner, test_db):
    view = await registry.register(owner, "  Rex  ", "  Loyal  ")
    assert view.status == DogStatus.AVAILABLE
    assert view.name == "Rex"
    assert view.description == "Loyal"
    stored = await test_db.get(Dog, view.id)
    assert stored.owner_id == owner
    assert stored.adopter_id is None


async def test_register_rejects_blank_name(registry, owner):
    with pytest.raises(InvalidInputError, match="Dog name cannot be empty"):
        await registry.register(owner, "   ", "desc")


# ─── adopt ───────────────────────────────────────────────────────

async def test_adopt_sets_adoption_fields(registry, dog, owner, adopter):
    view = await registry.adopt(str(dog.id), adopter, "  Thanks!  ")
    assert view.status == DogStatus.ADOPTED
    assert view.owner.id == owner
    assert view.owner.username == "alice"
    assert view.adoption_message == "Thanks!"
    assert view.adoption_date is not None


async def test_adopt_blank_message_stored_as_none(registry, dog, adopter):
    view = await registry.adopt(str(dog.id), adopter, "   ")
    assert view.adoption_message is None


async def test_adopt_malformed_id(registry, adopter):
    with pytest.raises(InvalidInputError, match="Invalid dog ID"):
        await registry.adopt("xyz", adopter)


async def test_adopt_missing_dog(registry, adopter):
    with pytest.raises(ResourceNotFoundError, match="Dog not found"):
        await registry.adopt(str(uuid4()), adopter)


async def test_adopt_own_dog(registry, dog, owner):
    with pytest.raises(SelfAdoptionError):
        await registry.adopt(str(dog.id), owner)


async def test_adopt_twice(registry, dog, adopter, users):
    await registry.adopt(str(dog.id), adopter)
    carol = await users.register("carol", "secret1")
    with pytest.raises(DogAlreadyAdoptedError):
        await registry.adopt(str(dog.id), UserId(carol.id))


async def test_adopt_message_too_long(registry, dog, adopter):
    with pytest.raises(InvalidInputError, match="200"):
        await registry.adopt(str(dog.id), adopter, "x" * 201)


async def test_adopt_stale_read_loses_to_conditional_update(
    registry, dog, adopter, users, test_db, test_session_factory, auth,
):
    """Two adopters race: the one whose pre-check read is stale gets the conflict."""
    carol = await users.register("carol", "secret1")
    # Load into this session's identity map, then end its transaction
    await test_db.get(Dog, dog.id)
    await test_db.commit()

    async with test_session_factory() as other:
        rival = DogRegistry(other, UserDirectory(other, auth))
        await rival.adopt(str(dog.id), UserId(carol.id))

    # The identity map still says 'available', the UPDATE matches nothing
    with pytest.raises(DogAlreadyAdoptedError):
        await registry.adopt(str(dog.id), adopter)

    stored = await test_db.scalar(select(Dog.adopter_id).where(Dog.id == dog.id))
    assert stored == carol.id


async def test_adopt_dog_deleted_after_read_is_not_found(
    registry, dog, owner, adopter, test_db, test_session_factory, auth,
):
    await test_db.get(Dog, dog.id)
    await test_db.commit()

    async with test_session_factory() as other:
        rival = DogRegistry(other, UserDirectory(other, auth))
        await rival.remove(str(dog.id), owner)

    with pytest.raises(ResourceNotFoundError):
        await registry.adopt(str(dog.id), adopter)


# ─── remove ──────────────────────────────────────────────────────

async def test_remove_deletes_dog(registry, dog, owner, test_db):
    await registry.remove(str(dog.id), owner)
    assert await test_db.scalar(select(Dog.id).where(Dog.id == dog.id)) is None


async def test_remove_by_stranger_forbidden(registry, dog, adopter):
    with pytest.raises(ForbiddenError, match="You can only remove dogs you registered"):
        await registry.remove(str(dog.id), adopter)


async def test_remove_adopted_dog(registry, dog, owner, adopter):
    await registry.adopt(str(dog.id), adopter)
    with pytest.raises(AdoptedDogRemovalError):
        await registry.remove(str(dog.id), owner)


async def test_remove_missing_dog(registry, owner):
    with pytest.raises(ResourceNotFoundError):
        await registry.remove(str(uuid4()), owner)


async def test_remove_malformed_id(registry, owner):
    with pytest.raises(InvalidInputError, match="Invalid dog ID"):
        await registry.remove("123", owner)


async def test_remove_stale_read_loses_to_adoption(
    registry, dog, owner, adopter, test_db, test_session_factory, auth,
):
    await test_db.get(Dog, dog.id)
    await test_db.commit()

    async with test_session_factory() as other:
        rival = DogRegistry(other, UserDirectory(other, auth))
        await rival.adopt(str(dog.id), adopter)

    with pytest.raises(AdoptedDogRemovalError):
        await registry.remove(str(dog.id), owner)


# ─── list_by_owner ───────────────────────────────────────────────

async def test_list_by_owner_newest_first(registry, owner):
    first = await registry.register(owner, "First", "desc")
    second = await registry.register(owner, "Second", "desc")
    page = await registry.list_by_owner(owner)
    assert [d.id for d in page.dogs] == [second.id, first.id]
    assert page.pagination.total_items == 2


async def test_list_by_owner_scoped_to_owner(registry, owner, adopter):
    await registry.register(owner, "Mine", "desc")
    await registry.register(adopter, "Theirs", "desc")
    page = await registry.list_by_owner(owner)
    assert [d.name for d in page.dogs] == ["Mine"]


async def test_list_by_owner_status_filter(registry, owner, adopter):
    kept = await registry.register(owner, "Kept", "desc")
    gone = await registry.register(owner, "Gone", "desc")
    await registry.adopt(str(gone.id), adopter, "Thanks!")

    adopted = await registry.list_by_owner(owner, status_filter="adopted")
    assert [d.id for d in adopted.dogs] == [gone.id]
    assert adopted.dogs[0].adopter.username == "bob"
    assert adopted.dogs[0].adoption_message == "Thanks!"

    available = await registry.list_by_owner(owner, status_filter="available")
    assert [d.id for d in available.dogs] == [kept.id]
    assert available.dogs[0].adopter is None

    unfiltered = await registry.list_by_owner(owner, status_filter="bogus")
    assert unfiltered.pagination.total_items == 2


async def test_list_by_owner_paging(registry, owner):
    for i in range(12):
        await registry.register(owner, f"Dog {i}", "desc")
    page = await registry.list_by_owner(owner, page="2", limit="5")
    assert len(page.dogs) == 5
    assert page.pagination.current_page == 2
    assert page.pagination.total_pages == 3
    assert page.pagination.has_next is True
    assert page.pagination.has_prev is True


async def test_list_by_owner_page_past_end_is_empty(registry, owner):
    await registry.register(owner, "Solo", "desc")
    page = await registry.list_by_owner(owner, page="99999999999999999999999")
    assert page.dogs == []
    assert page.pagination.total_items == 1
    assert page.pagination.has_next is False


# ─── list_by_adopter ─────────────────────────────────────────────

async def test_list_by_adopter(registry, owner, adopter):
    a = await registry.register(owner, "A", "desc")
    b = await registry.register(owner, "B", "desc")
    await registry.register(owner, "Unadopted", "desc")
    await registry.adopt(str(a.id), adopter)
    await registry.adopt(str(b.id), adopter, "Thanks!")

    page = await registry.list_by_adopter(adopter)
    assert [d.id for d in page.dogs] == [b.id, a.id]
    assert page.dogs[0].original_owner.username == "alice"
    assert page.dogs[0].adoption_message == "Thanks!"
    assert page.pagination.total_items == 2


async def test_list_by_adopter_empty(registry, adopter):
    page = await registry.list_by_adopter(adopter)
    assert page.dogs == []
    assert page.pagination.total_pages == 0


# ─── Timestamps ──────────────────────────────────────────────────

async def test_timestamps_read_back_as_utc(registry, dog, adopter, test_db):
    await registry.adopt(str(dog.id), adopter)
    created_at, adoption_date = (await test_db.execute(
        select(Dog.created_at, Dog.adoption_date).where(Dog.id == dog.id),
    )).one()
    assert created_at == dog.created_at
    assert created_at.tzinfo is timezone.utc
    assert adoption_date.tzinfo is timezone.utc
