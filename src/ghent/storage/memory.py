from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from pymongo.results import DeleteResult, InsertOneResult

from ghent.mongo.collections import USER_COLLECTIONS

if TYPE_CHECKING:
    from collections.abc import Mapping

_MISSING = object()
_DUPLICATE_KEY = 11000


def _lookup(document: Mapping[str, Any], path: str) -> object:
    value: object = document
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _field(document: Mapping[str, Any], path: str) -> object:
    # A missing field matches None, as in MongoDB
    value = _lookup(document, path)
    return None if value is _MISSING else value


def _matches(document: Mapping[str, Any], filter_: Mapping[str, Any]) -> bool:
    return all(_field(document, key) == expected for key, expected in filter_.items())


@dataclass
class InMemoryCollection:
    name: str
    documents: list[dict[str, Any]] = field(default_factory=list)
    unique_fields: set[str] = field(default_factory=set)

    async def find_one(self, filter: Mapping[str, Any]) -> dict[str, Any] | None:  # noqa: A002
        for document in self.documents:
            if _matches(document, filter):
                return copy.deepcopy(document)
        return None

    async def insert_one(self, document: Mapping[str, Any]) -> InsertOneResult:
        stored = copy.deepcopy(dict(document))
        stored.setdefault("_id", ObjectId())
        for key in ("_id", *sorted(self.unique_fields)):
            value = _lookup(stored, key)
            if value is _MISSING:
                continue
            if any(_lookup(existing, key) == value for existing in self.documents):
                msg = f"E11000 duplicate key error collection: {self.name} index: {key}_1 dup key: {value!r}"
                raise DuplicateKeyError(msg, code=_DUPLICATE_KEY)
        self.documents.append(stored)
        return InsertOneResult(stored["_id"], acknowledged=True)

    async def delete_one(self, filter: Mapping[str, Any]) -> DeleteResult:  # noqa: A002
        for index, document in enumerate(self.documents):
            if _matches(document, filter):
                del self.documents[index]
                return DeleteResult({"n": 1, "ok": 1.0}, acknowledged=True)
        return DeleteResult({"n": 0, "ok": 1.0}, acknowledged=True)

    async def create_index(self, keys: str, *, unique: bool = False) -> str:
        if unique:
            self.unique_fields.add(keys)
        return f"{keys}_1"


class InMemoryConnection:
    """Document store kept in process memory.

    Implements the same collection surface as ``MongoConnection`` so the
    repositories can run without a MongoDB server.
    """

    def __init__(self, *, database: str = "ghent", user_database: str | None = None) -> None:
        self.database = database
        self.user_database = user_database or database
        self._collections: dict[tuple[str, str], InMemoryCollection] = {}

    def collection(self, name: str) -> InMemoryCollection:
        database = self.user_database if name in USER_COLLECTIONS else self.database
        key = (database, name)
        if key not in self._collections:
            self._collections[key] = InMemoryCollection(name=name)
        return self._collections[key]
