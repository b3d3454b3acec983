from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Self

from ghent.core.exceptions import ConfigurationError
from ghent.core.settings import GhentSettings
from ghent.proto import CollectionProvider, PasswordVerifierProtocol
from ghent.repositories import AuthorizationCodeRepository, ClientRepository, TokenRepository, UserRepository
from ghent.utils.crypto import Argon2PasswordVerifier
from ghent.utils.scopes import ScopeResolver

if TYPE_CHECKING:
    from ghent.models import (
        AccessTokenRecord,
        AuthorizationCodeRecord,
        AuthorizationCodeSpec,
        Client,
        ClientSnapshot,
        RefreshTokenRecord,
        TokenRecord,
        TokenSpec,
        User,
        UserSnapshot,
    )


def _or_false[T](value: T | None) -> T | Literal[False]:
    return False if value is None else value


class AuthorizationModel:
    """Model consumed by an OAuth2 protocol engine.

    Lookups return ``False`` when nothing matches or the credentials are
    wrong. Datastore and verifier faults are raised, never turned into
    ``False``, so the engine can tell a denied grant from an outage.
    """

    def __init__(
        self,
        *,
        clients: ClientRepository,
        users: UserRepository,
        tokens: TokenRepository,
        codes: AuthorizationCodeRepository,
        scopes: ScopeResolver,
    ) -> None:
        self.clients = clients
        self.users = users
        self.tokens = tokens
        self.codes = codes
        self.scopes = scopes

    @classmethod
    def from_connection(
        cls,
        connection: CollectionProvider,
        *,
        settings: GhentSettings | None = None,
        verifier: PasswordVerifierProtocol | None = None,
    ) -> Self:
        if not isinstance(connection, CollectionProvider):
            msg = f"{type(connection).__name__} does not provide document collections"
            raise ConfigurationError(msg)
        verifier = verifier or Argon2PasswordVerifier()
        if not isinstance(verifier, PasswordVerifierProtocol):
            msg = f"{type(verifier).__name__} is not a password verifier"
            raise ConfigurationError(msg)
        settings = settings or GhentSettings()
        return cls(
            clients=ClientRepository(connection),
            users=UserRepository(connection, verifier),
            tokens=TokenRepository(connection),
            codes=AuthorizationCodeRepository(connection),
            scopes=ScopeResolver(settings.system_scopes),
        )

    async def get_client(self, client_id: str, client_secret: str | None = None) -> Client | Literal[False]:
        return _or_false(await self.clients.get(client_id, client_secret))

    async def get_user(self, username: str, password: str) -> User | Literal[False]:
        return _or_false(await self.users.get(username, password))

    async def get_user_from_client(self, client: Client) -> User | Literal[False]:
        return _or_false(await self.users.get_from_client(client))

    async def save_token(
        self,
        token: TokenSpec,
        client: Client | ClientSnapshot,
        user: User | UserSnapshot,
    ) -> TokenRecord | Literal[False]:
        return _or_false(await self.tokens.save(client, user, token))

    async def get_access_token(self, token: str) -> AccessTokenRecord | Literal[False]:
        return _or_false(await self.tokens.get_access_token(token))

    async def get_refresh_token(self, token: str) -> RefreshTokenRecord | Literal[False]:
        return _or_false(await self.tokens.get_refresh_token(token))

    async def revoke_access_token(self, token: AccessTokenRecord) -> bool:
        return await self.tokens.revoke_access_token(token)

    async def revoke_refresh_token(self, token: RefreshTokenRecord) -> bool:
        return await self.tokens.revoke_refresh_token(token)

    async def get_authorization_code(self, code: str) -> AuthorizationCodeRecord | Literal[False]:
        return _or_false(await self.codes.get(code))

    async def save_authorization_code(
        self,
        code: AuthorizationCodeSpec,
        client: Client | ClientSnapshot,
        user: User | UserSnapshot,
    ) -> AuthorizationCodeRecord | Literal[False]:
        return _or_false(await self.codes.save(client, user, code))

    async def revoke_authorization_code(self, code: AuthorizationCodeRecord) -> bool:
        return await self.codes.revoke(code)

    async def validate_scope(
        self,
        client: Client | ClientSnapshot,
        user: User | UserSnapshot,
        scope: str | None = None,
    ) -> str:
        return self.scopes.validate_scope(client, user, scope)

    async def verify_scope(self, token: AccessTokenRecord, scope: str | None) -> bool:
        return self.scopes.verify_scope(token, scope)
