"""User Directory — registration, authentication, and public lookups against a real DB.

Invariants:
    - Stored password is a hash, never the plaintext
    - Duplicate usernames rejected by the unique index (DuplicateUsernameError)
    - Unknown user and wrong password fail identically
    - public_views resolves many ids in one call and omits unknown ids
"""

import logging
from uuid import uuid4

import pytest

from dog_adoption.core.errors import (
    DuplicateUsernameError, InvalidInputError, UnauthorizedError,
)
from dog_adoption.services.user_directory import INVALID_CREDENTIALS


async def test_register_stores_hash(users):
    view = await users.register("alice", "secret1")
    user = await users.get_by_id(view.id)
    assert user.username == "alice"
    assert user.password_hash != "secret1"
    assert users.auth.verify_password("secret1", user.password_hash)


async def test_register_trims_username(users):
    view = await users.register("  alice  ", "secret1")
    assert view.username == "alice"


async def test_register_duplicate_username(users):
    await users.register("alice", "secret1")
    with pytest.raises(DuplicateUsernameError):
        await users.register("alice", "another1")


async def test_register_duplicate_leaves_session_usable(users):
    await users.register("alice", "secret1")
    with pytest.raises(DuplicateUsernameError):
        await users.register("alice", "another1")
    view = await users.register("bob", "secret1")
    assert view.username == "bob"


async def test_register_invalid_input(users):
    with pytest.raises(InvalidInputError, match="at least 3"):
        await users.register("al", "secret1")


async def test_authenticate_issues_verifiable_token(users):
    created = await users.register("alice", "secret1")
    token, view = await users.authenticate("alice", "secret1")
    assert view == created
    identity = users.auth.verify(token)
    assert identity.user_id == created.id
    assert identity.username == "alice"


async def test_authenticate_wrong_password(users):
    await users.register("alice", "secret1")
    with pytest.raises(UnauthorizedError, match=INVALID_CREDENTIALS):
        await users.authenticate("alice", "wrong-password")


async def test_authenticate_unknown_user(users):
    with pytest.raises(UnauthorizedError, match=INVALID_CREDENTIALS):
        await users.authenticate("nobody", "secret1")


async def test_public_views_batch(users):
    a = await users.register("alice", "secret1")
    b = await users.register("bob", "secret1")
    views = await users.public_views([a.id, b.id, uuid4()])
    assert set(views) == {a.id, b.id}
    assert views[b.id].username == "bob"


async def test_public_views_empty(users):
    assert await users.public_views([]) == {}


async def test_duplicate_username_logged_as_argument(users, caplog):
    await users.register("alice", "secret1")
    with caplog.at_level(logging.INFO, logger="dog_adoption.services.user_directory"):
        with pytest.raises(DuplicateUsernameError):
            await users.register("alice", "another1")
    record = next(
        r for r in caplog.records
        if isinstance(r.msg, str) and r.msg.startswith("Registration rejected")
    )
    assert record.msg == "Registration rejected, username taken: %s"
    assert record.args == ("alice",)
