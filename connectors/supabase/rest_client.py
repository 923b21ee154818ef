"""Supabase/PostgREST HTTP Client.

Low-level HTTP client for the hosted table API.
Handles key headers, filter encoding and error mapping.

Every call is a single attempt: there is no retry and no backoff. The only
timeout is the transport session's; hitting it is a StoreConnectionError.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
import asyncio
import json

import aiohttp

from core.observability.logging import get_logger

logger = get_logger(__name__)


class StoreApiError(Exception):
    """Base exception for remote store API errors."""
    def __init__(self, message: str, status_code: int = 0, response_body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class StoreAuthenticationError(StoreApiError):
    """Access key rejected (401/403)."""
    pass


class StoreNotFoundError(StoreApiError):
    """Table or resource not found (404)."""
    pass


class StoreValidationError(StoreApiError):
    """Row rejected by the store (400/409/422)."""
    pass


class StoreConnectionError(StoreApiError):
    """Transport-level failure: DNS, refused connection, dropped socket, timeout."""
    pass


@dataclass
class StoreApiConfig:
    """Configuration for the table API client."""
    url: str
    key: str
    schema: str = "public"
    rest_path: str = "/rest/v1"
    timeout: Optional[float] = None  # seconds; None keeps aiohttp's default

    def get_table_url(self, table: str) -> str:
        """Get the URL for a table endpoint."""
        return f"{self.url.rstrip('/')}{self.rest_path}/{table}"


# A filter is (column, operator, value) with operator one of eq, gte, lte.
Filter = Tuple[str, str, Any]

FILTER_OPERATORS = ("eq", "neq", "gt", "gte", "lt", "lte")


def encode_filters(filters: Optional[Sequence[Filter]]) -> List[Tuple[str, str]]:
    """Encode filters as PostgREST query parameters (`column=op.value`)."""
    params: List[Tuple[str, str]] = []
    for column, operator, value in filters or ():
        if operator not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {operator}")
        if isinstance(value, bool):
            value = "true" if value else "false"
        params.append((column, f"{operator}.{value}"))
    return params


class SupabaseRestClient:
    """HTTP client for a PostgREST table API.

    Provides:
    - Keyed API calls (apikey + bearer headers)
    - Equality and range filters
    - Error mapping onto StoreApiError subclasses

    Usage:
        client = SupabaseRestClient(StoreApiConfig(url, key))
        async with client:
            rows = await client.select("tasks", [("due_date", "eq", "2024-01-01")])
    """

    def __init__(self, api_config: StoreApiConfig):
        self.api_config = api_config
        self._session: Optional[aiohttp.ClientSession] = None

    async def connect(self) -> None:
        """Initialize the HTTP session."""
        if self._session is None:
            if self.api_config.timeout is not None:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.api_config.timeout)
                )
            else:
                self._session = aiohttp.ClientSession()

    async def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "SupabaseRestClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    def _get_headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        """Get headers for API requests."""
        headers = {
            "apikey": self.api_config.key,
            "Authorization": f"Bearer {self.api_config.key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Accept-Profile": self.api_config.schema,
            "Content-Profile": self.api_config.schema,
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[List[Tuple[str, str]]] = None,
        data: Optional[Union[Dict[str, Any], List[Dict[str, Any]]]] = None,
        prefer: Optional[str] = None,
    ) -> Any:
        """Make a single API request.

        Args:
            method: HTTP method
            table: Table name
            params: Query parameters
            data: Request body
            prefer: PostgREST Prefer header

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            StoreAuthenticationError: Access key rejected
            StoreNotFoundError: Table not found
            StoreValidationError: Row rejected
            StoreConnectionError: Transport failure
            StoreApiError: Other API errors
        """
        if not self._session:
            raise StoreApiError("Not connected. Call connect() first.")

        url = self.api_config.get_table_url(table)

        try:
            async with self._session.request(
                method,
                url,
                headers=self._get_headers(prefer),
                params=params,
                json=data,
            ) as response:
                response_text = await response.text()

                if response.status < 400:
                    if response.status == 204 or not response_text:
                        return None
                    return json.loads(response_text)

                if response.status in (401, 403):
                    raise StoreAuthenticationError(
                        f"Authentication failed: {response_text}",
                        response.status,
                        response_text,
                    )

                if response.status == 404:
                    raise StoreNotFoundError(
                        f"Resource not found: {url}",
                        response.status,
                        response_text,
                    )

                if response.status in (400, 409, 422):
                    raise StoreValidationError(
                        f"Validation error: {_error_message(response_text)}",
                        response.status,
                        response_text,
                    )

                raise StoreApiError(
                    f"API error {response.status}: {_error_message(response_text)}",
                    response.status,
                    response_text,
                )
        except asyncio.TimeoutError as e:
            logger.warning(f"{method} {table} timed out")
            raise StoreConnectionError(f"Request timed out: {method} {table}") from e
        except aiohttp.ClientError as e:
            logger.warning(f"{method} {table} failed with {type(e).__name__}: {e}")
            raise StoreConnectionError(f"Request failed: {e}") from e
        except json.JSONDecodeError as e:
            raise StoreApiError(f"Malformed response from {table}: {e}") from e

    async def select(
        self,
        table: str,
        filters: Optional[Sequence[Filter]] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Select rows from a table.

        Args:
            table: Table name
            filters: (column, operator, value) triples, ANDed together
            order: PostgREST order expression (e.g., "due_date.asc")

        Returns:
            List of rows
        """
        params = [("select", "*")] + encode_filters(filters)
        if order:
            params.append(("order", order))
        result = await self._request("GET", table, params=params)
        if result is None:
            return []
        if not isinstance(result, list):
            raise StoreApiError(f"Malformed response from {table}: expected a JSON array")
        return result

    async def insert(
        self,
        table: str,
        rows: Union[Dict[str, Any], List[Dict[str, Any]]],
    ) -> List[Dict[str, Any]]:
        """Insert one or more rows and return them as stored."""
        return await self._request(
            "POST", table, data=rows, prefer="return=representation"
        ) or []

    async def update(
        self,
        table: str,
        record_id: str,
        partial: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Update the row with `record_id` and return it as stored."""
        params = encode_filters([("id", "eq", record_id)])
        return await self._request(
            "PATCH", table, params=params, data=partial, prefer="return=representation"
        ) or []

    async def delete(self, table: str, record_id: str) -> None:
        """Delete the row with `record_id`."""
        params = encode_filters([("id", "eq", record_id)])
        await self._request("DELETE", table, params=params)


def _error_message(response_text: str) -> str:
    """Pull PostgREST's `message` out of an error body when present."""
    try:
        body = json.loads(response_text)
    except (TypeError, ValueError):
        return response_text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response_text
