from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ghent.core.exceptions import InvalidPasswordError, MalformedDocumentError
from ghent.models import Credential, User
from ghent.mongo.collections import CREDENTIALS, USERS
from ghent.repositories.documents import document_id

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ghent.models import Client
    from ghent.proto import CollectionProvider, PasswordVerifierProtocol

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(
        self,
        connection: CollectionProvider,
        verifier: PasswordVerifierProtocol,
        *,
        dummy_credential: Credential | None = None,
    ) -> None:
        self.connection = connection
        self.verifier = verifier
        self.dummy_credential = dummy_credential or getattr(verifier, "dummy_credential", None)

    async def get(self, username: str, password: str) -> User | None:
        """Return the user when `password` matches the stored credential.

        An unknown username, a missing credential and a wrong password all
        return None so callers cannot tell them apart. The first two still run
        the verifier against `dummy_credential` so they take as long as a
        wrong password.
        """
        logger.debug("Fetching user %s", username)
        document = await self.connection.collection(USERS).find_one({"username": username})
        if document is None:
            self._burn_password(password)
            logger.info("Rejected credentials: unknown user %s", username)
            return None
        user = user_from_document(document)

        credential_document = await self.connection.collection(CREDENTIALS).find_one({"username": username})
        if credential_document is None:
            self._burn_password(password)
            logger.warning("Rejected credentials: user %s has no stored credential", username)
            return None
        credential = credential_from_document(credential_document)

        if not self._check_password(password, credential):
            logger.info("Rejected credentials: wrong password for user %s", username)
            return None
        return user

    async def get_from_client(self, client: Client) -> User | None:
        if client.user is None:
            logger.debug("Client %s has no owning user", client.name)
            return None

        logger.debug("Fetching user %s for client %s", client.user.username, client.name)
        document = await self.connection.collection(USERS).find_one({"username": client.user.username})
        if document is None:
            return None
        return user_from_document(document)

    def _check_password(self, password: str, credential: Credential) -> bool:
        try:
            return bool(self.verifier.verify(password, credential))
        except InvalidPasswordError:
            return False

    def _burn_password(self, password: str) -> None:
        if self.dummy_credential is not None:
            self._check_password(password, self.dummy_credential)


def user_from_document(document: Mapping[str, Any]) -> User:
    try:
        return User(
            id=document_id(document),
            username=document["username"],
            scope=document.get("scope") or "",
        )
    except (KeyError, ValidationError) as exc:
        msg = f"cannot read user document {document.get('_id')}"
        raise MalformedDocumentError(USERS, msg) from exc


def credential_from_document(document: Mapping[str, Any]) -> Credential:
    try:
        return Credential(username=document["username"], password_hash=document.get("password_hash") or "")
    except (KeyError, ValidationError) as exc:
        msg = f"cannot read credential document {document.get('_id')}"
        raise MalformedDocumentError(CREDENTIALS, msg) from exc
