"""Protocol seams between the repositories and their collaborators."""

from ghent.proto.connection import CollectionProvider, DocumentCollection
from ghent.proto.verifier import PasswordVerifierProtocol

__all__ = [
    "CollectionProvider",
    "DocumentCollection",
    "PasswordVerifierProtocol",
]
