"""Remote store client factory.

Creates connections to the hosted table API using credentials from the
environment, or falls back to seeded in-memory repositories when none are
configured.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

# Load .env file if it exists
from dotenv import load_dotenv
env_path = Path(__file__).resolve().parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

from connectors.memory import build_memory_repositories
from connectors.repository_base import Repository
from connectors.supabase import StoreApiConfig, SupabaseRestClient, build_repositories
from core.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)


@dataclass
class StoreSettings:
    """Connection and logging settings read from the environment."""
    url: Optional[str] = None
    key: Optional[str] = None
    log_json: bool = False
    log_level: str = "INFO"

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.key)


def get_store_settings() -> StoreSettings:
    """Read settings from environment variables.

    - FARM_STORE_URL: Remote store endpoint (e.g., "https://xyz.supabase.co")
    - FARM_STORE_KEY: Remote store access key
    - FARM_LOG_JSON: "1" to emit JSON logs
    - FARM_LOG_LEVEL: Log level name (default INFO)
    """
    return StoreSettings(
        url=os.getenv("FARM_STORE_URL") or None,
        key=os.getenv("FARM_STORE_KEY") or None,
        log_json=os.getenv("FARM_LOG_JSON", "0").lower() in ("1", "true", "yes"),
        log_level=os.getenv("FARM_LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(settings: Optional[StoreSettings] = None) -> None:
    """Configure logging from settings."""
    settings = settings or get_store_settings()
    configure_logging(
        level=getattr(logging, settings.log_level, logging.INFO),
        json_format=settings.log_json,
        force=True,
    )


def create_rest_client(settings: Optional[StoreSettings] = None) -> SupabaseRestClient:
    """Create a REST client for the hosted store.

    Returns:
        Unconnected SupabaseRestClient

    Raises:
        ValueError: If required environment variables are missing
    """
    settings = settings or get_store_settings()

    if not settings.url:
        raise ValueError(
            "FARM_STORE_URL environment variable not set. "
            "Set to your store endpoint (e.g., 'https://xyz.supabase.co')"
        )

    if not settings.key:
        raise ValueError(
            "FARM_STORE_KEY environment variable not set. "
            "Set to your store access key"
        )

    return SupabaseRestClient(StoreApiConfig(url=settings.url, key=settings.key))


def build_backend(
    settings: Optional[StoreSettings] = None,
) -> Tuple[Dict[str, Repository], Optional[SupabaseRestClient]]:
    """Build one repository per table.

    Returns:
        (repositories keyed by table, REST client or None in demo mode).
        The caller owns the client and must connect/disconnect it.
    """
    settings = settings or get_store_settings()

    if not settings.is_configured:
        logger.warning("FARM_STORE_URL/FARM_STORE_KEY not set; using seeded in-memory store")
        return build_memory_repositories(seed=True), None

    client = create_rest_client(settings)
    return build_repositories(client), client
