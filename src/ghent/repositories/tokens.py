from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ghent.models import AccessTokenRecord, RefreshTokenRecord, TokenRecord
from ghent.mongo.collections import ACCESS_TOKENS, REFRESH_TOKENS
from ghent.repositories.documents import build_record, read_snapshots, snapshot_fields

if TYPE_CHECKING:
    from ghent.models import Client, ClientSnapshot, TokenSpec, User, UserSnapshot
    from ghent.proto import CollectionProvider

logger = logging.getLogger(__name__)


class TokenRepository:
    def __init__(self, connection: CollectionProvider) -> None:
        self.connection = connection

    async def save(
        self,
        client: Client | ClientSnapshot,
        user: User | UserSnapshot,
        spec: TokenSpec,
    ) -> TokenRecord | None:
        """Store an access token and, when present, its refresh token.

        Both documents embed the client and user as they are now. The two
        inserts are not atomic: if the refresh token insert fails the access
        token stays stored and the error is raised to the caller; an
        unacknowledged refresh insert returns None.
        """
        logger.debug("Saving token for client %s and user %s", client.name, user.username)
        now = datetime.now(UTC)
        snapshots = snapshot_fields(client, user)

        result = await self.connection.collection(ACCESS_TOKENS).insert_one(
            {
                "token": spec.access_token,
                "scope": spec.scope,
                "expires_at": spec.access_token_expires_at,
                **snapshots,
                "created_at": now,
                "updated_at": now,
            },
        )
        if not result.acknowledged:
            logger.warning("Access token insert for client %s was not acknowledged", client.name)
            return None

        if spec.refresh_token:
            try:
                refresh_result = await self.connection.collection(REFRESH_TOKENS).insert_one(
                    {
                        "token": spec.refresh_token,
                        "scope": spec.scope,
                        "expires_at": spec.refresh_token_expires_at,
                        **snapshots,
                        "created_at": now,
                        "updated_at": now,
                    },
                )
            except Exception:
                logger.exception(
                    "Refresh token insert failed after its access token was stored (client %s, user %s)",
                    client.name,
                    user.username,
                )
                raise
            if not refresh_result.acknowledged:
                logger.warning(
                    "Refresh token insert for client %s was not acknowledged; its access token stays stored",
                    client.name,
                )
                return None

        return TokenRecord.model_validate({**spec.model_dump(), **snapshots})

    async def get_access_token(self, token: str) -> AccessTokenRecord | None:
        logger.debug("Fetching access token")
        document = await self.connection.collection(ACCESS_TOKENS).find_one({"token": token})
        if document is None:
            return None
        client, user = read_snapshots(document, ACCESS_TOKENS)
        return build_record(
            AccessTokenRecord,
            document,
            ACCESS_TOKENS,
            access_token=document.get("token"),
            access_token_expires_at=document.get("expires_at"),
            scope=document.get("scope") or "",
            client=client,
            user=user,
        )

    async def get_refresh_token(self, token: str) -> RefreshTokenRecord | None:
        logger.debug("Fetching refresh token")
        document = await self.connection.collection(REFRESH_TOKENS).find_one({"token": token})
        if document is None:
            return None
        client, user = read_snapshots(document, REFRESH_TOKENS)
        return build_record(
            RefreshTokenRecord,
            document,
            REFRESH_TOKENS,
            refresh_token=document.get("token"),
            refresh_token_expires_at=document.get("expires_at"),
            scope=document.get("scope") or "",
            client=client,
            user=user,
        )

    async def revoke_access_token(self, record: AccessTokenRecord) -> bool:
        logger.debug("Revoking access token for client %s and user %s", record.client.name, record.user.username)
        result = await self.connection.collection(ACCESS_TOKENS).delete_one({"token": record.access_token})
        return result.deleted_count == 1

    async def revoke_refresh_token(self, record: RefreshTokenRecord) -> bool:
        logger.debug("Revoking refresh token for client %s and user %s", record.client.name, record.user.username)
        result = await self.connection.collection(REFRESH_TOKENS).delete_one({"token": record.refresh_token})
        return result.deleted_count == 1

