import json
import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

logger = logging.getLogger(__name__)

ADMIN_SCOPE = "admin"


class _Scoped(Protocol):
    scope: str


def parse_scopes(scopes_str: str) -> list[str]:
    scopes_str = scopes_str.strip()

    if not scopes_str:
        return []

    if scopes_str.startswith("["):
        try:
            parsed = json.loads(scopes_str)
            if isinstance(parsed, list):
                return [str(scope) for scope in parsed]
        except json.JSONDecodeError:
            pass

    # Comma or whitespace separated
    return [scope for scope in scopes_str.replace(",", " ").split() if scope]


def split_scope(scope: str | None) -> list[str]:
    if not scope:
        return []
    return scope.split()


def intersect_scopes(scope: str | None, allowed: str | Iterable[str] | None) -> str:
    # Keeps the tokens of `scope` that appear in `allowed`, in the order of `scope`
    allowed_set = set(split_scope(allowed)) if allowed is None or isinstance(allowed, str) else set(allowed)
    return " ".join(token for token in split_scope(scope) if token in allowed_set)


def validate_scope(
    client_scope: str | None,
    user_scope: str | None,
    requested_scope: str | None,
    system_scopes: Sequence[str],
) -> str:
    client_valid = intersect_scopes(client_scope, system_scopes)
    if not client_valid:
        logger.debug("Client scope %r carries no recognized scope", client_scope)
        return ""

    if requested_scope is None:
        result = intersect_scopes(user_scope, client_valid)
        if not result:
            logger.debug("User scope %r has no overlap with client scope %r", user_scope, client_valid)
        return result

    request_valid = intersect_scopes(requested_scope, system_scopes)
    if not request_valid:
        logger.debug("Requested scope %r carries no recognized scope", requested_scope)
        return ""

    client_filtered = intersect_scopes(client_valid, request_valid)
    if not client_filtered:
        logger.debug("Requested scope %r is not granted to the client", request_valid)
        return ""

    result = intersect_scopes(user_scope, client_filtered)
    if not result:
        logger.debug("Requested scope %r is not granted to the user", client_filtered)
    return result


def verify_scope(token_scope: str | None, required_scope: str | None) -> bool:
    authorized = split_scope(token_scope)
    if not authorized:
        return False

    # admin skips every other check
    if ADMIN_SCOPE in authorized:
        return True

    required = set(split_scope(required_scope))
    return all(scope in required for scope in authorized)


class ScopeResolver:
    def __init__(self, system_scopes: Sequence[str]) -> None:
        self.system_scopes = tuple(system_scopes)

    def validate_scope(self, client: _Scoped, user: _Scoped, scope: str | None = None) -> str:
        return validate_scope(client.scope, user.scope, scope, self.system_scopes)

    def verify_scope(self, token: _Scoped, scope: str | None) -> bool:
        return verify_scope(token.scope, scope)
