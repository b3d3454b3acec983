"""Repositories over the document store, one per stored entity."""

from ghent.repositories.clients import ClientRepository
from ghent.repositories.codes import AuthorizationCodeRepository
from ghent.repositories.tokens import TokenRepository
from ghent.repositories.users import UserRepository

__all__ = [
    "AuthorizationCodeRepository",
    "ClientRepository",
    "TokenRepository",
    "UserRepository",
]
