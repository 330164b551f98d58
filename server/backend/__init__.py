"""REST client for the backend-as-a-service (database, storage, accounts)."""

from server.backend.client import (
    AdminClient,
    SessionClient,
    create_admin_client,
    create_session_client,
)
from server.backend.query import Query
from server.backend.services import ID, Account, Databases, Storage

__all__ = [
    "AdminClient",
    "SessionClient",
    "create_admin_client",
    "create_session_client",
    "Query",
    "ID",
    "Account",
    "Databases",
    "Storage",
]
