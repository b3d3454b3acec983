"""Mapping between stored documents and records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from ghent.core.exceptions import MalformedDocumentError
from ghent.models import Client, ClientSnapshot, User, UserSnapshot

if TYPE_CHECKING:
    from collections.abc import Mapping


def document_id(document: Mapping[str, Any]) -> str:
    # Accept both raw documents (`_id`) and embedded references (`id`)
    return str(document["_id"] if "_id" in document else document["id"])


def snapshot_fields(client: Client | ClientSnapshot, user: User | UserSnapshot) -> dict[str, Any]:
    client_snapshot = client.snapshot() if isinstance(client, Client) else client
    user_snapshot = user.snapshot() if isinstance(user, User) else user
    return {
        "client": client_snapshot.model_dump(),
        "user": user_snapshot.model_dump(),
    }


def read_snapshots(document: Mapping[str, Any], collection: str) -> tuple[ClientSnapshot, UserSnapshot]:
    try:
        return (
            ClientSnapshot.model_validate(document["client"]),
            UserSnapshot.model_validate(document["user"]),
        )
    except (KeyError, ValidationError) as exc:
        msg = f"document {document.get('_id')} has no valid client/user snapshot"
        raise MalformedDocumentError(collection, msg) from exc


def build_record[R: BaseModel](model: type[R], document: Mapping[str, Any], collection: str, **fields: Any) -> R:
    try:
        return model(**fields)
    except ValidationError as exc:
        msg = f"document {document.get('_id')} cannot be read as {model.__name__}"
        raise MalformedDocumentError(collection, msg) from exc
