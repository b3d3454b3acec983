from __future__ import annotations

from typing import TYPE_CHECKING

from ghent.models import Client, ClientOwner, User
from ghent.mongo.collections import CLIENTS, CREDENTIALS, USERS
from ghent.utils.crypto import hash_password

if TYPE_CHECKING:
    from argon2 import PasswordHasher

    from ghent.proto import CollectionProvider
    from ghent.storage.memory import InMemoryConnection

USER_PASSWORD = "correct horse battery staple"  # noqa: S105
CLIENT_SECRET = "web-app-secret"  # noqa: S105


async def seed_user(
    connection: CollectionProvider,
    hasher: PasswordHasher,
    *,
    username: str = "alice",
    password: str = USER_PASSWORD,
    scope: str = "profile user:read",
) -> User:
    result = await connection.collection(USERS).insert_one({"username": username, "scope": scope})
    await connection.collection(CREDENTIALS).insert_one(
        {"username": username, "password_hash": hash_password(password, hasher)},
    )
    return User(id=str(result.inserted_id), username=username, scope=scope)


async def seed_client(
    connection: CollectionProvider,
    owner: User | None,
    *,
    client_id: str = "web-app",
    client_secret: str = CLIENT_SECRET,
    name: str = "Web App",
    scope: str = "profile admin",
    grants: list[str] | None = None,
    redirect_uris: list[str] | None = None,
) -> Client:
    grants = grants or ["authorization_code", "password", "refresh_token"]
    redirect_uris = redirect_uris or ["https://app.example.com/callback"]
    document: dict[str, object] = {
        "client_id": client_id,
        "client_secret": client_secret,
        "name": name,
        "scope": scope,
        "grants": grants,
        "redirect_uris": redirect_uris,
    }
    if owner is not None:
        document["user"] = {"id": owner.id, "username": owner.username}
    result = await connection.collection(CLIENTS).insert_one(document)
    return Client(
        id=str(result.inserted_id),
        client_id=client_id,
        name=name,
        scope=scope,
        grants=grants,
        redirect_uris=redirect_uris,
        user=ClientOwner(id=owner.id, username=owner.username) if owner is not None else None,
    )


def update_document(
    connection: InMemoryConnection,
    name: str,
    filter_: dict[str, object],
    values: dict[str, object],
) -> None:
    """Change a stored document in place, standing in for an admin edit."""
    for document in connection.collection(name).documents:
        if all(document.get(key) == value for key, value in filter_.items()):
            document.update(values)
            return
    msg = f"no document in {name} matches {filter_}"
    raise LookupError(msg)
