from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

from __tests__.fixtures.seed import USER_PASSWORD, seed_client, seed_user
from ghent.core.exceptions import InvalidPasswordError, MalformedDocumentError
from ghent.models import Client, User
from ghent.mongo.collections import CREDENTIALS, USERS
from ghent.repositories.users import UserRepository
from ghent.storage.memory import InMemoryConnection
from ghent.utils.crypto import Argon2PasswordVerifier


@pytest.mark.asyncio
async def test_get_user_with_valid_password(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
    user: User,
) -> None:
    repository = UserRepository(connection, verifier)

    fetched = await repository.get("alice", USER_PASSWORD)

    assert fetched == user


@pytest.mark.asyncio
async def test_unknown_user_and_wrong_password_look_the_same(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
    user: User,
) -> None:
    repository = UserRepository(connection, verifier)

    unknown = await repository.get("unknown", "x")
    wrong_password = await repository.get(user.username, "wrong-password")

    assert unknown is None
    assert wrong_password is None


@pytest.mark.asyncio
async def test_unknown_user_still_runs_the_verifier(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
    user: User,
) -> None:
    spy = MagicMock(wraps=verifier)
    repository = UserRepository(connection, spy, dummy_credential=verifier.dummy_credential)

    assert await repository.get("unknown", "guess") is None

    spy.verify.assert_called_once_with("guess", verifier.dummy_credential)


@pytest.mark.asyncio
async def test_missing_credential_still_runs_the_verifier(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
) -> None:
    await connection.collection(USERS).insert_one({"username": "bob", "scope": "profile"})
    spy = MagicMock(wraps=verifier)
    repository = UserRepository(connection, spy, dummy_credential=verifier.dummy_credential)

    assert await repository.get("bob", "guess") is None

    spy.verify.assert_called_once_with("guess", verifier.dummy_credential)


def test_dummy_credential_defaults_to_the_verifier(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
) -> None:
    assert UserRepository(connection, verifier).dummy_credential is verifier.dummy_credential
    assert UserRepository(connection, SimpleNamespace(verify=bool)).dummy_credential is None


@pytest.mark.asyncio
async def test_user_without_credential_is_rejected(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
) -> None:
    await connection.collection(USERS).insert_one({"username": "bob", "scope": "profile"})
    repository = UserRepository(connection, verifier)

    assert await repository.get("bob", "anything") is None


@pytest.mark.asyncio
async def test_malformed_stored_hash_fails_closed(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
) -> None:
    await connection.collection(USERS).insert_one({"username": "carol", "scope": "profile"})
    await connection.collection(CREDENTIALS).insert_one({"username": "carol", "password_hash": "not-a-hash"})
    repository = UserRepository(connection, verifier)

    assert await repository.get("carol", "not-a-hash") is None


@pytest.mark.asyncio
async def test_invalid_password_marker_is_normalized(connection: InMemoryConnection, user: User) -> None:
    def _reject(*_args: object) -> bool:
        msg = "Invalid password"
        raise InvalidPasswordError(msg)

    repository = UserRepository(connection, SimpleNamespace(verify=_reject))

    assert await repository.get(user.username, USER_PASSWORD) is None


@pytest.mark.asyncio
async def test_other_verifier_errors_propagate(connection: InMemoryConnection, user: User) -> None:
    def _explode(*_args: object) -> bool:
        msg = "Memory allocation error"
        raise VerificationError(msg)

    repository = UserRepository(connection, SimpleNamespace(verify=_explode))

    with pytest.raises(VerificationError):
        await repository.get(user.username, USER_PASSWORD)


@pytest.mark.asyncio
async def test_malformed_user_document(connection: InMemoryConnection, verifier: Argon2PasswordVerifier) -> None:
    await connection.collection(USERS).insert_one({"username": 42})
    repository = UserRepository(connection, verifier)

    with pytest.raises(MalformedDocumentError):
        await repository.get(42, "x")


@pytest.mark.asyncio
async def test_get_user_from_client(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
    oauth_client: Client,
    user: User,
) -> None:
    repository = UserRepository(connection, verifier)

    assert await repository.get_from_client(oauth_client) == user


@pytest.mark.asyncio
async def test_get_user_from_client_without_owner(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
) -> None:
    client = await seed_client(connection, None, client_id="service", name="Service")
    repository = UserRepository(connection, verifier)

    assert await repository.get_from_client(client) is None


@pytest.mark.asyncio
async def test_get_user_from_client_with_deleted_owner(
    connection: InMemoryConnection,
    verifier: Argon2PasswordVerifier,
    oauth_client: Client,
) -> None:
    await connection.collection(USERS).delete_one({"username": "alice"})
    repository = UserRepository(connection, verifier)

    assert await repository.get_from_client(oauth_client) is None


@pytest.mark.asyncio
async def test_users_can_live_in_a_separate_database(hasher: PasswordHasher) -> None:
    connection = InMemoryConnection(database="oauth", user_database="accounts")
    user = await seed_user(connection, hasher, username="dave")
    repository = UserRepository(connection, Argon2PasswordVerifier(hasher))

    assert await repository.get("dave", USER_PASSWORD) == user
    assert ("accounts", USERS) in connection._collections
    assert ("accounts", CREDENTIALS) in connection._collections
