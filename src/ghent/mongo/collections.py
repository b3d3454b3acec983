CLIENTS = "clients"
USERS = "users"
CREDENTIALS = "credentials"
ACCESS_TOKENS = "access_tokens"
REFRESH_TOKENS = "refresh_tokens"
CODES = "codes"

# Collections holding resource-owner data; routed to the user database when one is configured
USER_COLLECTIONS = frozenset({USERS, CREDENTIALS})

UNIQUE_INDEXES: tuple[tuple[str, str], ...] = (
    (CLIENTS, "client_id"),
    (CLIENTS, "name"),
    (USERS, "username"),
    (CREDENTIALS, "username"),
    (ACCESS_TOKENS, "token"),
    (REFRESH_TOKENS, "token"),
    (CODES, "code"),
)
