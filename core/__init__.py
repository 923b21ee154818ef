"""Core module - storage-neutral farm records and observability.

This module contains the canonical record models, form validation models
and logging utilities. It is intentionally unaware of the remote store.

Store-specific logic (Supabase/PostgREST, in-memory) belongs in /connectors/.
"""

__version__ = "1.0.0"
