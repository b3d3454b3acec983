from ghent.utils.crypto import Argon2PasswordVerifier, hash_password
from ghent.utils.scopes import (
    ADMIN_SCOPE,
    ScopeResolver,
    intersect_scopes,
    parse_scopes,
    split_scope,
    validate_scope,
    verify_scope,
)

__all__ = [
    "ADMIN_SCOPE",
    "Argon2PasswordVerifier",
    "ScopeResolver",
    "hash_password",
    "intersect_scopes",
    "parse_scopes",
    "split_scope",
    "validate_scope",
    "verify_scope",
]
