from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from ghent.mongo.collections import UNIQUE_INDEXES, USER_COLLECTIONS

if TYPE_CHECKING:
    from types import TracebackType

    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

    from ghent.proto import CollectionProvider

logger = logging.getLogger(__name__)


class MongoConnection:
    """Pooled handle to the OAuth and user databases.

    One instance is created by the process bootstrap and passed to every
    repository. Closing it closes the underlying motor client and its pool.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        *,
        database: str,
        user_database: str | None = None,
    ) -> None:
        self.client = client
        self.database = database
        self.user_database = user_database or database
        self._closed = False

    def collection(self, name: str) -> AsyncIOMotorCollection:
        if self._closed:
            msg = "MongoConnection is closed"
            raise RuntimeError(msg)
        database = self.user_database if name in USER_COLLECTIONS else self.database
        return self.client[database][name]

    async def ping(self) -> None:
        await self.client[self.database].command("ping")

    def close(self) -> None:
        if self._closed:
            return
        self.client.close()
        self._closed = True
        logger.info("Closed MongoDB connection to database %s", self.database)

    async def __aenter__(self) -> Self:
        await self.ping()
        logger.info("Connected to MongoDB database %s (users: %s)", self.database, self.user_database)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


async def ensure_indexes(connection: CollectionProvider) -> list[str]:
    created = []
    for collection_name, field in UNIQUE_INDEXES:
        index_name = await connection.collection(collection_name).create_index(field, unique=True)
        logger.info("Ensured unique index %s on %s", index_name, collection_name)
        created.append(index_name)
    return created
