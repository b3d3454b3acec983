from __future__ import annotations

import logging
import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

from ghent.core.exceptions import InvalidPasswordError
from ghent.models import Credential

logger = logging.getLogger(__name__)


def hash_password(password: str, hasher: PasswordHasher | None = None) -> str:
    return (hasher or PasswordHasher()).hash(password)


class Argon2PasswordVerifier:
    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self.hasher = hasher or PasswordHasher()
        # Verified against when no stored credential exists, so every lookup pays one argon2 run
        self.dummy_credential = Credential(
            username="",
            password_hash=self.hasher.hash(secrets.token_urlsafe(32)),
        )

    def verify(self, password: str, credential: Credential) -> bool:
        if not credential.password_hash:
            logger.warning("Credential for %s has no stored password hash", credential.username)
            return False
        try:
            return self.hasher.verify(credential.password_hash, password)
        except VerifyMismatchError as exc:
            msg = "Invalid password"
            raise InvalidPasswordError(msg) from exc
        except InvalidHashError:
            logger.warning("Credential for %s has a malformed password hash", credential.username)
            return False
