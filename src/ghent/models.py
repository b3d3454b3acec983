"""Records exchanged between the protocol engine and the repositories.

Token and code records embed a ``ClientSnapshot`` and a ``UserSnapshot`` copied
at issuance, so a record never has to be joined against the live ``clients`` or
``users`` collections to be interpreted.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ClientOwner(_Record):
    # Older client documents name the owner by username only
    id: str | None = None
    username: str


class ClientSnapshot(_Record):
    id: str
    name: str
    grants: list[str] = Field(default_factory=list)
    scope: str = ""
    redirect_uris: list[str] = Field(default_factory=list)


class Client(ClientSnapshot):
    client_id: str
    user: ClientOwner | None = None

    def snapshot(self) -> ClientSnapshot:
        return ClientSnapshot.model_validate(self.model_dump(include=set(ClientSnapshot.model_fields)))


class UserSnapshot(_Record):
    id: str
    username: str
    scope: str = ""


class User(UserSnapshot):
    def snapshot(self) -> UserSnapshot:
        return UserSnapshot.model_validate(self.model_dump(include=set(UserSnapshot.model_fields)))


class Credential(_Record):
    username: str
    password_hash: str


def _is_expired(expires_at: datetime | None, now: datetime | None) -> bool:
    if expires_at is None:
        return False
    current = now if now is not None else datetime.now(UTC)
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    return expires_at <= current


class TokenSpec(_Record):
    access_token: str
    access_token_expires_at: datetime | None = None
    refresh_token: str | None = None
    refresh_token_expires_at: datetime | None = None
    scope: str = ""


class TokenRecord(TokenSpec):
    client: ClientSnapshot
    user: UserSnapshot


class AccessTokenRecord(_Record):
    access_token: str
    access_token_expires_at: datetime | None = None
    scope: str = ""
    client: ClientSnapshot
    user: UserSnapshot

    def is_expired(self, now: datetime | None = None) -> bool:
        return _is_expired(self.access_token_expires_at, now)


class RefreshTokenRecord(_Record):
    refresh_token: str
    refresh_token_expires_at: datetime | None = None
    scope: str = ""
    client: ClientSnapshot
    user: UserSnapshot

    def is_expired(self, now: datetime | None = None) -> bool:
        return _is_expired(self.refresh_token_expires_at, now)


class AuthorizationCodeSpec(_Record):
    authorization_code: str
    expires_at: datetime
    redirect_uri: str
    scope: str = ""


class AuthorizationCodeRecord(AuthorizationCodeSpec):
    client: ClientSnapshot
    user: UserSnapshot

    def is_expired(self, now: datetime | None = None) -> bool:
        return _is_expired(self.expires_at, now)
