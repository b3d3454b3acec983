from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ghent.models import Credential


@runtime_checkable
class PasswordVerifierProtocol(Protocol):
    # May raise InvalidPasswordError instead of returning False on a mismatch
    def verify(self, password: str, credential: Credential) -> bool: ...
