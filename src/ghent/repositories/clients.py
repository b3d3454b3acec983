from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ghent.core.exceptions import MalformedDocumentError
from ghent.models import Client, ClientOwner
from ghent.mongo.collections import CLIENTS
from ghent.repositories.documents import document_id

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ghent.proto import CollectionProvider

logger = logging.getLogger(__name__)


class ClientRepository:
    def __init__(self, connection: CollectionProvider) -> None:
        self.connection = connection

    async def get(self, client_id: str, client_secret: str | None = None) -> Client | None:
        logger.debug("Fetching client %s (secret supplied: %s)", client_id, bool(client_secret))
        query: dict[str, Any] = {"client_id": client_id}
        # A lookup without a secret is weaker; only some grants use it
        if client_secret:
            query["client_secret"] = client_secret

        document = await self.connection.collection(CLIENTS).find_one(query)
        if document is None:
            logger.debug("No client matched %s", client_id)
            return None
        return client_from_document(document)


def client_from_document(document: Mapping[str, Any]) -> Client:
    try:
        owner = document.get("user")
        return Client(
            id=document_id(document),
            client_id=document["client_id"],
            name=document["name"],
            scope=document.get("scope") or "",
            grants=document.get("grants") or [],
            redirect_uris=document.get("redirect_uris") or [],
            user=client_owner(owner) if owner else None,
        )
    except (KeyError, TypeError, ValidationError) as exc:
        msg = f"cannot read client document {document.get('_id')}"
        raise MalformedDocumentError(CLIENTS, msg) from exc


def client_owner(owner: str | Mapping[str, Any]) -> ClientOwner:
    if isinstance(owner, str):
        return ClientOwner(username=owner)
    return ClientOwner(id=document_id(owner), username=owner["username"])
