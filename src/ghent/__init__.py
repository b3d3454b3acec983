"""Ghent - storage and scope decisions for an OAuth2 authorization server."""

from ghent.core.exceptions import ConfigurationError, GhentError, InvalidPasswordError, MalformedDocumentError
from ghent.core.model import AuthorizationModel
from ghent.core.settings import GhentSettings
from ghent.models import (
    AccessTokenRecord,
    AuthorizationCodeRecord,
    AuthorizationCodeSpec,
    Client,
    ClientOwner,
    ClientSnapshot,
    Credential,
    RefreshTokenRecord,
    TokenRecord,
    TokenSpec,
    User,
    UserSnapshot,
)
from ghent.mongo import MongoConnection, MongoSettings, ensure_indexes
from ghent.storage import InMemoryConnection
from ghent.utils import Argon2PasswordVerifier, ScopeResolver, hash_password

__version__ = "0.1.0"

__all__ = [
    "AccessTokenRecord",
    "Argon2PasswordVerifier",
    "AuthorizationCodeRecord",
    "AuthorizationCodeSpec",
    "AuthorizationModel",
    "Client",
    "ClientOwner",
    "ClientSnapshot",
    "ConfigurationError",
    "Credential",
    "GhentError",
    "GhentSettings",
    "InMemoryConnection",
    "InvalidPasswordError",
    "MalformedDocumentError",
    "MongoConnection",
    "MongoSettings",
    "RefreshTokenRecord",
    "ScopeResolver",
    "TokenRecord",
    "TokenSpec",
    "User",
    "UserSnapshot",
    "__version__",
    "ensure_indexes",
    "hash_password",
]
