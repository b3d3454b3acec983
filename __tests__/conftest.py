from __future__ import annotations

import pytest
import pytest_asyncio
from argon2 import PasswordHasher

from __tests__.fixtures.seed import seed_client, seed_user
from ghent.core.model import AuthorizationModel
from ghent.core.settings import GhentSettings
from ghent.models import Client, User
from ghent.storage.memory import InMemoryConnection
from ghent.utils.crypto import Argon2PasswordVerifier

SYSTEM_SCOPES = ["admin", "profile", "client:read", "client:write", "user:read", "user:write"]


@pytest.fixture
def connection() -> InMemoryConnection:
    return InMemoryConnection()


@pytest.fixture
def hasher() -> PasswordHasher:
    # Cheap parameters keep the suite fast
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def verifier(hasher: PasswordHasher) -> Argon2PasswordVerifier:
    return Argon2PasswordVerifier(hasher)


@pytest.fixture
def settings() -> GhentSettings:
    return GhentSettings(system_scopes=SYSTEM_SCOPES)


@pytest.fixture
def model(
    connection: InMemoryConnection,
    settings: GhentSettings,
    verifier: Argon2PasswordVerifier,
) -> AuthorizationModel:
    return AuthorizationModel.from_connection(connection, settings=settings, verifier=verifier)


@pytest_asyncio.fixture
async def user(connection: InMemoryConnection, hasher: PasswordHasher) -> User:
    return await seed_user(connection, hasher)


@pytest_asyncio.fixture
async def oauth_client(connection: InMemoryConnection, user: User) -> Client:
    return await seed_client(connection, user)
