from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ghent.models import AuthorizationCodeRecord
from ghent.mongo.collections import CODES
from ghent.repositories.documents import build_record, read_snapshots, snapshot_fields

if TYPE_CHECKING:
    from ghent.models import AuthorizationCodeSpec, Client, ClientSnapshot, User, UserSnapshot
    from ghent.proto import CollectionProvider

logger = logging.getLogger(__name__)


class AuthorizationCodeRepository:
    """Single-use authorization codes.

    Codes are never deleted as a side effect of reading them or of their
    expiry; the caller revokes a code right after exchanging it.
    """

    def __init__(self, connection: CollectionProvider) -> None:
        self.connection = connection

    async def save(
        self,
        client: Client | ClientSnapshot,
        user: User | UserSnapshot,
        spec: AuthorizationCodeSpec,
    ) -> AuthorizationCodeRecord | None:
        logger.debug("Saving authorization code for client %s and user %s", client.name, user.username)
        now = datetime.now(UTC)
        snapshots = snapshot_fields(client, user)

        result = await self.connection.collection(CODES).insert_one(
            {
                "code": spec.authorization_code,
                "scope": spec.scope,
                "redirect_uri": spec.redirect_uri,
                "expires_at": spec.expires_at,
                **snapshots,
                "created_at": now,
                "updated_at": now,
            },
        )
        if not result.acknowledged:
            logger.warning("Authorization code insert for client %s was not acknowledged", client.name)
            return None
        return AuthorizationCodeRecord.model_validate({**spec.model_dump(), **snapshots})

    async def get(self, code: str) -> AuthorizationCodeRecord | None:
        logger.debug("Fetching authorization code")
        document = await self.connection.collection(CODES).find_one({"code": code})
        if document is None:
            return None
        client, user = read_snapshots(document, CODES)
        return build_record(
            AuthorizationCodeRecord,
            document,
            CODES,
            authorization_code=document.get("code"),
            expires_at=document.get("expires_at"),
            redirect_uri=document.get("redirect_uri"),
            scope=document.get("scope") or "",
            client=client,
            user=user,
        )

    async def revoke(self, record: AuthorizationCodeRecord) -> bool:
        logger.debug("Revoking authorization code for client %s", record.client.name)
        result = await self.connection.collection(CODES).delete_one({"code": record.authorization_code})
        return result.deleted_count == 1
