#!/usr/bin/env python3
"""HTTP Client for the KNoT things service (the device registry).

This module provides the low-level client that knows HOW to talk to the
things service, but not WHAT a thing is. Mapping JSON to domain entities
belongs in the thing adapters that compose this client.

Handled here:
    - Per-request authorization (the thing's own token, sent verbatim)
    - Connection pooling via a shared aiohttp session
    - Typed errors for every non-2xx status and transport failure

Not handled here: retries. A failed request is reported once and the
caller decides whether to run the whole command again.

Usage:
    async with ThingsClient("http://things:8180") as client:
        thing = await client.get("/things/19cf40c23012ce1c", authorization=token)
        await client.delete("/things/19cf40c23012ce1c", authorization=token)
"""
import asyncio
import logging
from typing import Any, Optional

import aiohttp

from .exceptions import (
    ConfigurationError,
    RegistryConnectionError,
    RegistryError,
    RegistryServerError,
    RegistryTimeoutError,
    RegistryValidationError,
    ThingNotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


def thing_id_from_endpoint(endpoint: str) -> str:
    """Thing id of a thing endpoint (/things/{id} or /things/{id}/schema)."""
    parts = endpoint.strip("/").split("/")
    return parts[1] if len(parts) > 1 else parts[-1]


class ThingsClient:
    """Async HTTP client for the things service.

    Must be used as an async context manager so the session is closed:

        async with ThingsClient(base_url) as client:
            data = await client.get("/things/abc", authorization=token)

    Attributes:
        base_url: Base URL of the things service (e.g., "http://things:8180")
        timeout_seconds: Total timeout applied to each request
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        max_connections: int = 10,
    ):
        """Initialize the client.

        Raises:
            ConfigurationError: If base_url is empty.
        """
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ConfigurationError(
                "Things service URL is required. Set THINGS_URL.",
                missing_keys=["THINGS_URL"],
            )

        self.timeout_seconds = timeout_seconds
        self.max_connections = max_connections

        # Session is created in __aenter__, closed in __aexit__
        self._session: Optional[aiohttp.ClientSession] = None

    # ----------------------------------------
    # Context Manager Protocol
    # ----------------------------------------

    async def __aenter__(self) -> "ThingsClient":
        """Enter async context: create the HTTP session."""
        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(
                limit=self.max_connections,
                limit_per_host=self.max_connections,
            ),
            timeout=aiohttp.ClientTimeout(
                total=self.timeout_seconds,
                connect=10,
            ),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context: close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    # ----------------------------------------
    # Request Methods
    # ----------------------------------------

    async def _request(
        self,
        method: str,
        endpoint: str,
        authorization: str,
        json_body: Optional[dict] = None,
        read_body: bool = True,
    ) -> Optional[dict[str, Any]]:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, PUT, DELETE)
            endpoint: Path relative to base_url (e.g., "/things/abc")
            authorization: Token sent in the Authorization header
            json_body: JSON request body (for PUT)
            read_body: Parse the response body as JSON; when False the body
                is released unread and None is returned

        Returns:
            Parsed JSON response, or None for empty (204) or unread responses

        Raises:
            RegistryError: If response status is not 2xx, the body is not
                valid JSON, or a subclass for the specific status / transport
                failure
            RuntimeError: If called outside of async context manager
        """
        if not self._session:
            raise RuntimeError(
                "ThingsClient must be used as async context manager: "
                "async with ThingsClient(...) as client:"
            )

        url = f"{self.base_url}{endpoint}"
        headers = {
            "Authorization": authorization,
            "Content-Type": "application/json",
        }

        logger.debug(f"{method} {endpoint}")

        try:
            async with self._session.request(
                method=method,
                url=url,
                headers=headers,
                json=json_body,
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    raise self._create_registry_error(
                        status=response.status,
                        method=method,
                        endpoint=endpoint,
                        response_body=error_text,
                    )

                if not read_body or response.status == 204 or response.content_length == 0:
                    return None
                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise RegistryError(
                        f"Malformed JSON response for {method} {endpoint}",
                        status_code=response.status,
                        endpoint=endpoint,
                        cause=e,
                    )

        except aiohttp.ClientConnectionError as e:
            raise RegistryConnectionError(
                f"Failed to connect to {self.base_url}",
                endpoint=endpoint,
                cause=e,
            )

        except asyncio.TimeoutError as e:
            raise RegistryTimeoutError(
                f"Request to {endpoint} timed out",
                timeout_seconds=self.timeout_seconds,
                endpoint=endpoint,
                cause=e,
            )

        except aiohttp.ClientError as e:
            raise RegistryError(
                f"Network error during {method} {endpoint}: {e}",
                endpoint=endpoint,
                cause=e,
            )

    def _create_registry_error(
        self,
        status: int,
        method: str,
        endpoint: str,
        response_body: str,
    ) -> RegistryError:
        """Create appropriate RegistryError subclass based on status code."""
        if status in (401, 403):
            return UnauthorizedError(
                status_code=status,
                endpoint=endpoint,
                response_body=response_body,
            )

        if status == 404:
            return ThingNotFoundError(
                thing_id=thing_id_from_endpoint(endpoint),
                endpoint=endpoint,
                response_body=response_body,
            )

        if status in (400, 422):
            return RegistryValidationError(
                f"Validation failed for {method} {endpoint}",
                status_code=status,
                endpoint=endpoint,
                response_body=response_body,
            )

        if status >= 500:
            return RegistryServerError(
                f"Server error ({status}) for {method} {endpoint}",
                status_code=status,
                endpoint=endpoint,
                response_body=response_body,
            )

        return RegistryError(
            f"{method} {endpoint} failed",
            status_code=status,
            endpoint=endpoint,
            response_body=response_body,
        )

    async def get(self, endpoint: str, authorization: str) -> dict[str, Any]:
        """Make a GET request and return the JSON body."""
        return await self._request("GET", endpoint, authorization) or {}

    async def put(
        self,
        endpoint: str,
        authorization: str,
        json_body: dict,
    ) -> None:
        """Make a PUT request. The response body is not read."""
        await self._request(
            "PUT", endpoint, authorization, json_body=json_body, read_body=False
        )

    async def delete(self, endpoint: str, authorization: str) -> None:
        """Make a DELETE request. The response body is not read."""
        await self._request("DELETE", endpoint, authorization, read_body=False)
