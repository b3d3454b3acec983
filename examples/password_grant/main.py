"""Walk through a password grant against a local MongoDB.

Run with `python -m examples.password_grant.main` after starting MongoDB on
localhost:27017 (or setting GHENT_MONGO_URL).
"""

import asyncio
import logging
import secrets
from datetime import UTC, datetime, timedelta

from ghent import AuthorizationModel, GhentSettings, TokenSpec, ensure_indexes, hash_password
from ghent.mongo.collections import CLIENTS, CREDENTIALS, USERS

logger = logging.getLogger(__name__)


async def main() -> None:
    settings = GhentSettings()
    async with settings.mongo.connect() as connection:
        await ensure_indexes(connection)

        if await connection.collection(USERS).find_one({"username": "demo"}) is None:
            result = await connection.collection(USERS).insert_one({"username": "demo", "scope": "profile"})
            await connection.collection(CREDENTIALS).insert_one(
                {"username": "demo", "password_hash": hash_password("demo-password")},
            )
            await connection.collection(CLIENTS).insert_one(
                {
                    "client_id": "demo-client",
                    "client_secret": "demo-secret",
                    "name": "Demo",
                    "scope": "profile admin",
                    "grants": ["password", "refresh_token"],
                    "redirect_uris": [],
                    "user": {"id": str(result.inserted_id), "username": "demo"},
                },
            )

        model = AuthorizationModel.from_connection(connection, settings=settings)
        client = await model.get_client("demo-client", "demo-secret")
        user = await model.get_user("demo", "demo-password")
        if client is False or user is False:
            logger.error("Demo client or user rejected")
            return

        scope = await model.validate_scope(client, user)
        now = datetime.now(UTC)
        token = await model.save_token(
            TokenSpec(
                access_token=secrets.token_urlsafe(32),
                access_token_expires_at=now + timedelta(minutes=30),
                refresh_token=secrets.token_urlsafe(32),
                refresh_token_expires_at=now + timedelta(days=1),
                scope=scope,
            ),
            client,
            user,
        )
        logger.info("Issued token with scope %r for %s", token.scope, token.user.username)

        access = await model.get_access_token(token.access_token)
        logger.info("Token grants profile: %s", await model.verify_scope(access, "profile"))
        logger.info("Revoked: %s", await model.revoke_access_token(access))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
