"""Domain Types — verifies identity wrappers, status enum, and value objects.

Tests:
    - NewType wrappers exist and are callable
    - DogStatus has exactly the two lifecycle states and serializes to string
    - Value objects are frozen
"""

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from dog_adoption.core.domain_types import (
    DogId, DogSnapshot, DogStatus, UserId, UserIdentity,
    ADOPTION_MESSAGE_MAX_LENGTH, DOG_DESCRIPTION_MAX_LENGTH,
    DOG_NAME_MAX_LENGTH, PASSWORD_MIN_LENGTH, USERNAME_MIN_LENGTH,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert DogId(uid) == uid


def test_dog_status_has_two_states():
    assert set(DogStatus) == {DogStatus.AVAILABLE, DogStatus.ADOPTED}


def test_dog_status_values_match_wire_format():
    assert DogStatus.AVAILABLE == "available"
    assert DogStatus("adopted") is DogStatus.ADOPTED


def test_field_limits():
    assert USERNAME_MIN_LENGTH == 3
    assert PASSWORD_MIN_LENGTH == 6
    assert DOG_NAME_MAX_LENGTH == 50
    assert DOG_DESCRIPTION_MAX_LENGTH == 500
    assert ADOPTION_MESSAGE_MAX_LENGTH == 200


def test_user_identity_is_frozen():
    identity = UserIdentity(user_id=UserId(uuid4()), username="alice")
    with pytest.raises(FrozenInstanceError):
        identity.username = "mallory"


def test_dog_snapshot_is_frozen():
    snap = DogSnapshot(
        id=DogId(uuid4()), owner_id=UserId(uuid4()),
        adopter_id=None, status=DogStatus.AVAILABLE,
    )
    with pytest.raises(FrozenInstanceError):
        snap.status = DogStatus.ADOPTED
