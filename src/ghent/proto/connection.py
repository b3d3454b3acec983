from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pymongo.results import DeleteResult, InsertOneResult


@runtime_checkable
class DocumentCollection(Protocol):
    # The subset of the motor collection API the repositories rely on
    async def find_one(self, filter: Mapping[str, Any]) -> dict[str, Any] | None: ...  # noqa: A002

    async def insert_one(self, document: Mapping[str, Any]) -> InsertOneResult: ...

    async def delete_one(self, filter: Mapping[str, Any]) -> DeleteResult: ...  # noqa: A002

    async def create_index(self, keys: str, *, unique: bool = False) -> str: ...


@runtime_checkable
class CollectionProvider(Protocol):
    def collection(self, name: str) -> DocumentCollection: ...
