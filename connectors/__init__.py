"""Store Connectors - Pluggable access to the remote tables.

This package contains the abstract Repository interface and concrete
implementations (hosted Supabase/PostgREST store, in-memory store).

Core record models are store-neutral. This package handles:
- Access key headers and API communication
- Filter encoding
- Boundary parsing of loosely typed rows
- Folding every failure into RepositoryFailure

Key Design Principle:
- Stores and controllers depend ONLY on the Repository interface
- All methods return NORMALIZED record models
- No PostgREST-specific types leak through the interface
"""

from connectors.repository_base import Repository, RepositoryFailure
from connectors.memory import InMemoryRepository, build_memory_repositories

__all__ = [
    "Repository",
    "RepositoryFailure",
    "InMemoryRepository",
    "build_memory_repositories",
]
