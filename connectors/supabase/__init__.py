"""Supabase Connector Package.

Implements the Repository interface over a hosted PostgREST table API.
"""

from connectors.supabase.rest_client import (
    SupabaseRestClient,
    StoreApiConfig,
    StoreApiError,
    StoreAuthenticationError,
    StoreNotFoundError,
    StoreValidationError,
    StoreConnectionError,
)
from connectors.supabase.table_repository import TableRepository, build_repositories

__all__ = [
    # Client
    "SupabaseRestClient",
    "StoreApiConfig",
    # Errors
    "StoreApiError",
    "StoreAuthenticationError",
    "StoreNotFoundError",
    "StoreValidationError",
    "StoreConnectionError",
    # Repositories
    "TableRepository",
    "build_repositories",
]
